"""
Concurrent event creation with live progress reporting
"""
import asyncio
import logging
from typing import Dict, List

from config.settings import Config
from src.bot.transport import HTML, ChatTransport
from src.scheduler.event_composer import EventRequest, EventResult
from src.scheduler.reply_formatter import render_progress, render_reply

logger = logging.getLogger(__name__)


class Outcome:
    """Tally of one message: created events, plain notes and counts"""

    def __init__(self, total: int, other: List[str] = None):
        self.created: List[EventResult] = []
        self.other: List[str] = list(other or [])
        self.total = total
        self.completed = 0

    @property
    def all_succeeded(self) -> bool:
        return self.completed == self.total

    @property
    def is_empty(self) -> bool:
        return self.total == 0 and not self.other


class BatchSubmitter:
    """
    Creates events concurrently and reports them in submission order

    Every insert is started before the first one is awaited. Results are then
    awaited one by one in input order, so a slow early insert holds back the
    progress shown for later ones, but the bar only ever moves forward.
    """

    def __init__(self, calendar_manager, transport: ChatTransport):
        self.calendar_manager = calendar_manager
        self.transport = transport

    async def submit(self, chat_id, credentials: Dict, requests: List[EventRequest],
                     notes: List[str]) -> Outcome:
        outcome = Outcome(total=len(requests), other=notes)
        if outcome.is_empty:
            return outcome

        tasks = [
            asyncio.ensure_future(
                asyncio.to_thread(self.calendar_manager.insert_event, credentials, request.to_dict())
            )
            for request in requests
        ]

        try:
            message_id = await self.transport.send_message(chat_id, Config.PROCESSING_MESSAGE)
        except Exception:
            # inserts are already running; collect them before giving up
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        for request, task in zip(requests, tasks):
            try:
                created_event = await task
            except Exception as e:
                logger.error(f"❌ Error creating event {request.summary!r}: {e}")
                continue

            outcome.completed += 1
            outcome.created.append(EventResult.from_api(created_event))
            await self._edit(chat_id, message_id, render_progress(outcome.completed, outcome.total))

        if outcome.all_succeeded:
            await self._edit(chat_id, message_id, render_reply(outcome), parse_mode=HTML)
        else:
            logger.warning(f"⚠️  Only {outcome.completed}/{outcome.total} events created, summary suppressed")

        return outcome

    async def _edit(self, chat_id, message_id: int, text: str, parse_mode: str = None):
        try:
            await self.transport.edit_message(chat_id, message_id, text, parse_mode=parse_mode)
        except Exception as e:
            logger.error(f"Error updating message {message_id}: {e}")
