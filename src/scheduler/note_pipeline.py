"""
From one chat message to calendar events and a reply
"""
import asyncio
import logging
import time
from datetime import date
from typing import List, Optional, Tuple

from src.bot.transport import ChatTransport, prompt_login
from src.calendar.authorization import AuthorizationManager
from src.scheduler.batch_submitter import BatchSubmitter, Outcome
from src.scheduler.event_composer import EventRequest, compose_event
from src.scheduler.note_parser import parse_segments, resolve_date
from utils.logger import ShortNoteLogger

logger = logging.getLogger(__name__)


def build_requests(text: str, today: date = None) -> Tuple[List[EventRequest], List[str]]:
    """Event requests for the dated lines and the remaining plain notes, in order"""
    requests = []
    notes = []

    for segment in parse_segments(text):
        if segment.is_dated:
            requests.append(compose_event(resolve_date(segment.date_key, today), segment.text))
        else:
            notes.append(segment.text)

    return requests, notes


class NotePipeline:
    """Parses a message, checks the caller's login and submits the events"""

    def __init__(self, authorization: AuthorizationManager, calendar_manager, transport: ChatTransport):
        self.authorization = authorization
        self.transport = transport
        self.submitter = BatchSubmitter(calendar_manager, transport)

    async def process_message(self, caller_id, chat_id, text: str,
                              today: date = None) -> Optional[Outcome]:
        """
        Handle one free-text message from an authorized caller

        Returns None when the caller had to be sent back to the login flow.
        """
        start_time = time.time()
        requests, notes = build_requests(text, today)
        logger.info(f"📝 Message from {caller_id}: {len(requests)} dated lines, {len(notes)} notes")

        credentials = None
        if requests:
            credentials = await asyncio.to_thread(self.authorization.get_valid_credentials, caller_id)
            if credentials is None:
                await prompt_login(self.transport, self.authorization, chat_id, caller_id)
                return None

        outcome = await self.submitter.submit(chat_id, credentials, requests, notes)
        ShortNoteLogger.log_outcome(caller_id, outcome, time.time() - start_time)
        return outcome
