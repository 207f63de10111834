"""
Shared fixtures: in-memory calendar, file-backed credential store, recording chat
"""
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from src.bot.transport import ChatTransport
from src.calendar.authorization import AuthorizationManager
from src.calendar.credential_store import JsonFileCredentialStore
from src.calendar.mock_calendar_manager import MockCalendarManager


def utc_iso(delta: timedelta) -> str:
    return (datetime.now(timezone.utc).replace(tzinfo=None) + delta).isoformat()


class RecordingTransport(ChatTransport):
    """Keeps every chat call in order instead of talking to Telegram"""

    def __init__(self):
        self.calls = []
        self._ids = itertools.count(100)
        self.on_link = None

    async def send_message(self, chat_id, text, parse_mode=None):
        message_id = next(self._ids)
        self.calls.append(("send", chat_id, message_id, text, parse_mode))
        return message_id

    async def edit_message(self, chat_id, message_id, text, parse_mode=None):
        self.calls.append(("edit", chat_id, message_id, text, parse_mode))

    async def send_link(self, chat_id, text, button_text, url):
        if self.on_link is not None:
            self.on_link()
        message_id = next(self._ids)
        self.calls.append(("link", chat_id, message_id, text, url))
        return message_id

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def valid_tokens():
    return {
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "token_type": "Bearer",
        "scope": "https://www.googleapis.com/auth/calendar",
        "expiry": utc_iso(timedelta(hours=1)),
    }


@pytest.fixture
def expired_tokens():
    return {
        "access_token": "access-old",
        "refresh_token": None,
        "token_type": "Bearer",
        "scope": "https://www.googleapis.com/auth/calendar",
        "expiry": utc_iso(timedelta(hours=-1)),
    }


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    return JsonFileCredentialStore(str(db_path))


@pytest.fixture
def calendar():
    return MockCalendarManager()


@pytest.fixture
def authorization(calendar, store):
    return AuthorizationManager(calendar, store)


@pytest.fixture
def transport():
    return RecordingTransport()
