"""
Building Google Calendar event payloads from resolved note lines
"""
from typing import Dict

from config.settings import Config
from src.scheduler.note_parser import ResolvedDate
from utils.validators import DataSanitizer


class EventRequest:
    """Event payload before the calendar service assigns it an id"""

    def __init__(self, summary: str, description: str, start: str, end: str,
                 time_zone: str = Config.TIMEZONE, event_type: str = Config.EVENT_TYPE,
                 location: str = "", visibility: str = Config.EVENT_VISIBILITY):
        self.summary = summary
        self.description = description
        self.start = start
        self.end = end
        self.time_zone = time_zone
        self.event_type = event_type
        self.location = location
        self.visibility = visibility

    def to_dict(self) -> Dict:
        """Convert to the Calendar API event resource"""
        return {
            'summary': self.summary,
            'location': self.location,
            'description': self.description,
            'start': {
                'dateTime': self.start,
                'timeZone': self.time_zone,
            },
            'end': {
                'dateTime': self.end,
                'timeZone': self.time_zone,
            },
            'eventType': self.event_type,
            'visibility': self.visibility,
        }


class EventResult:
    """Created event as shown in the chat reply"""

    def __init__(self, url: str, summary: str, event_id: str = None):
        self.url = url
        self.summary = summary
        self.event_id = event_id

    @classmethod
    def from_api(cls, created_event: Dict, preview_length: int = Config.SUMMARY_PREVIEW_LENGTH):
        return cls(
            url=created_event.get('htmlLink', ''),
            summary=DataSanitizer.truncate_summary(created_event.get('summary', ''), preview_length),
            event_id=created_event.get('id'),
        )


def compose_event(resolved: ResolvedDate, text: str, **overrides) -> EventRequest:
    """
    Merge a resolved day and a note line into an event request

    Summary and description both carry the full line. Any EventRequest field
    may be overridden by keyword.
    """
    fields = {
        'summary': text,
        'description': text,
        'start': resolved.start,
        'end': resolved.end,
    }
    fields.update(overrides)
    return EventRequest(**fields)
