"""
Mock Calendar Manager for running without Google Calendar dependencies
"""
import itertools
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlencode

from src.calendar.calendar_manager import CalendarError, MissingRefreshTokenError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class MockCalendarManager:
    """In-memory calendar with the same surface as CalendarManager"""

    def __init__(self, fail_summaries: Iterable[str] = (), refresh_error: Exception = None):
        self.events: Dict[str, Dict] = {}
        self.fail_summaries = set(fail_summaries)
        self.refresh_error = refresh_error
        self.fail_deletes = False
        self.inserted: List[Dict] = []
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_authorization_url(self, state: str) -> str:
        return "https://accounts.example.com/o/oauth2/auth?" + urlencode({"state": state})

    def exchange_code(self, code: str) -> Dict:
        logger.info(f"📋 MOCK: Exchanging code {code}")
        if code == "invalid":
            raise CalendarError("invalid_grant")
        return {
            'access_token': f"mock-access-{code}",
            'refresh_token': f"mock-refresh-{code}",
            'token_type': 'Bearer',
            'scope': 'https://www.googleapis.com/auth/calendar',
            'expiry': (_utcnow() + timedelta(hours=1)).isoformat(),
        }

    def refresh_credentials(self, token_data: Dict) -> Dict:
        expiry = token_data.get('expiry')
        if token_data.get('access_token') and (not expiry or datetime.fromisoformat(expiry) > _utcnow()):
            return token_data

        if not token_data.get('refresh_token'):
            raise MissingRefreshTokenError("No refresh token is set.")
        if self.refresh_error is not None:
            raise self.refresh_error

        refreshed = dict(token_data)
        refreshed['access_token'] = f"{token_data.get('access_token') or 'mock-access'}-refreshed"
        refreshed['expiry'] = (_utcnow() + timedelta(hours=1)).isoformat()
        return refreshed

    def insert_event(self, token_data: Dict, body: Dict) -> Dict:
        summary = body.get('summary', '')
        if summary in self.fail_summaries:
            raise CalendarError(f"Mock insert failure for {summary!r}")

        with self._lock:
            event_id = f"mock_event_{next(self._ids)}"
            event = dict(body)
            event['id'] = event_id
            event['htmlLink'] = f"https://calendar.example.com/event?eid={event_id}"
            self.events[event_id] = event
            self.inserted.append(event)

        logger.info(f"📋 MOCK: Created event {event_id}")
        return event

    def list_events(self, token_data: Dict) -> List[Dict]:
        with self._lock:
            return list(self.events.values())

    def delete_event(self, token_data: Dict, event_id: str):
        if self.fail_deletes:
            raise CalendarError(f"Mock delete failure for {event_id}")
        with self._lock:
            self.events.pop(event_id, None)

    def delete_all_events(self, token_data: Dict) -> int:
        events = self.list_events(token_data)
        for event in events:
            self.delete_event(token_data, event['id'])
        return len(events)

    def get_event(self, event_id: str) -> Optional[Dict]:
        return self.events.get(event_id)
