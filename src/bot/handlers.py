"""
Chat command surface, independent of the Telegram update objects
"""
import asyncio
import logging

from config.settings import Config
from src.bot.transport import ChatTransport, prompt_login
from src.calendar.authorization import AuthorizationManager
from src.scheduler.note_pipeline import NotePipeline

logger = logging.getLogger(__name__)


class CommandHandlers:
    """/start, /deleteallevents and free-text notes"""

    def __init__(self, authorization: AuthorizationManager, calendar_manager, transport: ChatTransport):
        self.authorization = authorization
        self.calendar_manager = calendar_manager
        self.transport = transport
        self.pipeline = NotePipeline(authorization, calendar_manager, transport)

    async def start(self, caller_id, chat_id):
        if self.authorization.is_authorized(caller_id):
            await self.transport.send_message(chat_id, Config.WELCOME_MESSAGE)
        else:
            await prompt_login(self.transport, self.authorization, chat_id, caller_id)

    async def delete_all_events(self, caller_id, chat_id):
        credentials = await asyncio.to_thread(self.authorization.get_valid_credentials, caller_id)
        if credentials is None:
            await prompt_login(self.transport, self.authorization, chat_id, caller_id)
            return

        await self.transport.send_message(chat_id, "Deleting all events...")

        try:
            deleted = await asyncio.to_thread(self.calendar_manager.delete_all_events, credentials)
        except Exception as e:
            logger.error(f"Error deleting events for {caller_id}: {e}")
            await self.transport.send_message(chat_id, "There was an error deleting the events.")
            return

        logger.info(f"🗑️  Deleted {deleted} events for {caller_id}")
        await self.transport.send_message(chat_id, "All events have been deleted.")

    async def handle_text(self, caller_id, chat_id, text: str):
        if not text or text.startswith('/'):
            return

        if not self.authorization.is_authorized(caller_id):
            await prompt_login(self.transport, self.authorization, chat_id, caller_id)
            return

        await self.pipeline.process_message(caller_id, chat_id, text)
