"""
Telegram application for the ShortNote Calendar Bot
"""
import asyncio
import logging
from typing import Optional

from telegram import Update
from telegram.ext import Application, ApplicationBuilder, CommandHandler, ContextTypes, MessageHandler, filters

from src.bot.handlers import CommandHandlers
from src.bot.transport import TelegramTransport
from src.calendar.authorization import AuthorizationManager

logger = logging.getLogger(__name__)


class ShortNoteBot:
    """Binds Telegram updates to the command handlers"""

    def __init__(self, token: str, authorization: AuthorizationManager, calendar_manager):
        self.application: Application = (
            ApplicationBuilder()
            .token(token)
            # one caller's slow Google call must not hold up everyone else
            .concurrent_updates(True)
            .post_init(self._on_post_init)
            .build()
        )
        self.transport = TelegramTransport(self.application.bot)
        self.handlers = CommandHandlers(authorization, calendar_manager, self.transport)
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        self._setup_handlers()

    def _setup_handlers(self):
        self.application.add_handler(CommandHandler("start", self.on_start))
        self.application.add_handler(CommandHandler("deleteallevents", self.on_delete_all_events))
        self.application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.on_message))
        self.application.add_error_handler(self.on_error)

    async def _on_post_init(self, application: Application):
        self._loop = asyncio.get_running_loop()
        logger.info("🤖 Telegram bot initialized")

    async def on_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await self.handlers.start(update.effective_user.id, update.effective_chat.id)

    async def on_delete_all_events(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await self.handlers.delete_all_events(update.effective_user.id, update.effective_chat.id)

    async def on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await self.handlers.handle_text(
            update.effective_user.id,
            update.effective_chat.id,
            update.effective_message.text,
        )

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE):
        logger.error("Unhandled error while processing an update", exc_info=context.error)

    def notify(self, chat_id, text: str):
        """Send a chat message from another thread (the callback server)"""
        if self._loop is None:
            logger.warning(f"Bot loop not running, dropping notification to {chat_id}")
            return

        future = asyncio.run_coroutine_threadsafe(self.transport.send_message(chat_id, text), self._loop)
        future.add_done_callback(self._log_notify_failure)

    @staticmethod
    def _log_notify_failure(future):
        if not future.cancelled() and future.exception() is not None:
            logger.error(f"Failed to send notification: {future.exception()}")

    def run(self):
        """Poll Telegram until interrupted"""
        logger.info("Starting Telegram polling...")
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)
