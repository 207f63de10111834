"""
Chat transport used by the pipeline and command handlers
"""
import logging
from typing import Optional

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.constants import ParseMode

from config.settings import Config

logger = logging.getLogger(__name__)

HTML = "HTML"


class ChatTransport:
    """Operations the bot needs from a chat platform"""

    async def send_message(self, chat_id, text: str, parse_mode: Optional[str] = None) -> int:
        """Send a message and return its id"""
        raise NotImplementedError

    async def edit_message(self, chat_id, message_id: int, text: str, parse_mode: Optional[str] = None):
        raise NotImplementedError

    async def send_link(self, chat_id, text: str, button_text: str, url: str) -> int:
        """Send a message with one inline URL button"""
        raise NotImplementedError


class TelegramTransport(ChatTransport):
    """ChatTransport backed by a python-telegram-bot Bot"""

    PARSE_MODES = {HTML: ParseMode.HTML}

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send_message(self, chat_id, text: str, parse_mode: Optional[str] = None) -> int:
        message = await self.bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=self.PARSE_MODES.get(parse_mode),
        )
        return message.message_id

    async def edit_message(self, chat_id, message_id: int, text: str, parse_mode: Optional[str] = None):
        await self.bot.edit_message_text(
            text=text,
            chat_id=chat_id,
            message_id=message_id,
            parse_mode=self.PARSE_MODES.get(parse_mode),
        )

    async def send_link(self, chat_id, text: str, button_text: str, url: str) -> int:
        message = await self.bot.send_message(
            chat_id=chat_id,
            text=text,
            reply_markup=InlineKeyboardMarkup([[InlineKeyboardButton(button_text, url=url)]]),
        )
        return message.message_id


async def prompt_login(transport: ChatTransport, authorization, chat_id, caller_id):
    """Send the Google login button to a caller"""
    url = authorization.authorization_url(caller_id)
    logger.info(f"🔑 Prompting {caller_id} to log in")
    await transport.send_link(chat_id, Config.LOGIN_PROMPT, Config.LOGIN_BUTTON_TEXT, url)
