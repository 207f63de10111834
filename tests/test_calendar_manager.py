from datetime import datetime
from unittest.mock import MagicMock

import pytest
from google.oauth2.credentials import Credentials

from src.calendar.calendar_manager import CalendarManager, MissingRefreshTokenError


def test_valid_token_is_not_refreshed(valid_tokens):
    assert CalendarManager().refresh_credentials(valid_tokens) == valid_tokens


def test_expired_token_without_refresh_token_signals_expiry(expired_tokens):
    with pytest.raises(MissingRefreshTokenError):
        CalendarManager().refresh_credentials(expired_tokens)


def test_credentials_are_built_from_stored_pair(valid_tokens):
    credentials = CalendarManager()._get_credentials(valid_tokens)

    assert credentials.token == "access-1"
    assert credentials.refresh_token == "refresh-1"
    assert credentials.scopes == ["https://www.googleapis.com/auth/calendar"]


def _manager_with_service(service):
    manager = CalendarManager()
    manager._build_calendar_service = lambda token_data: service
    return manager


def test_insert_event_targets_primary_calendar(valid_tokens):
    service = MagicMock()
    service.events.return_value.insert.return_value.execute.return_value = {
        "id": "e1", "htmlLink": "https://cal/e1", "summary": "05/12 x",
    }

    created = _manager_with_service(service).insert_event(valid_tokens, {"summary": "05/12 x"})

    assert created["htmlLink"] == "https://cal/e1"
    service.events.return_value.insert.assert_called_once_with(calendarId="primary", body={"summary": "05/12 x"})


def test_list_events_follows_pages(valid_tokens):
    service = MagicMock()
    service.events.return_value.list.return_value.execute.side_effect = [
        {"items": [{"id": "a"}], "nextPageToken": "p2"},
        {"items": [{"id": "b"}]},
    ]

    events = _manager_with_service(service).list_events(valid_tokens)

    assert [e["id"] for e in events] == ["a", "b"]


def test_delete_all_events_deletes_each_listed_event(valid_tokens):
    service = MagicMock()
    service.events.return_value.list.return_value.execute.return_value = {"items": [{"id": "a"}, {"id": "b"}]}

    deleted = _manager_with_service(service).delete_all_events(valid_tokens)

    assert deleted == 2
    deleted_ids = {c.kwargs["eventId"] for c in service.events.return_value.delete.call_args_list}
    assert deleted_ids == {"a", "b"}


def test_successful_refresh_keeps_stored_refresh_token(monkeypatch):
    def fake_refresh(self, request):
        self.token = "access-new"
        self.expiry = datetime(2099, 1, 1)
        # Google may omit the refresh token from a refresh response
        self._refresh_token = None

    monkeypatch.setattr(Credentials, "refresh", fake_refresh)
    stored = {"access_token": "access-old", "refresh_token": "refresh-1", "expiry": "2000-01-01T00:00:00"}

    refreshed = CalendarManager().refresh_credentials(stored)

    assert refreshed["access_token"] == "access-new"
    assert refreshed["refresh_token"] == "refresh-1"
    assert refreshed["expiry"] == "2099-01-01T00:00:00"
