"""
Splitting chat notes into dated and undated segments, and resolving DD/MM dates
"""
import re
from datetime import date
from typing import List, Optional

DATE_PATTERN = re.compile(r'\b(\d{2}/\d{2})\b', re.ASCII)


class Segment:
    """One logical line of a note, dated by a DD/MM key or kept by line index"""

    def __init__(self, text: str, date_key: Optional[str] = None, index: Optional[int] = None):
        self.text = text
        self.date_key = date_key
        self.index = index

    @property
    def is_dated(self) -> bool:
        return self.date_key is not None

    def __repr__(self):
        tag = f"Dated({self.date_key})" if self.is_dated else f"Undated({self.index})"
        return f"Segment({tag}, {self.text!r})"


class ResolvedDate:
    """Start and end of a whole UTC day, serialized as YYYY-MM-DDTHH:MM:SSZ"""

    def __init__(self, year: int, month: int, day: int):
        self.year = year
        self.month = month
        self.day = day

    @property
    def start(self) -> str:
        return self._timestamp(0, 0, 0)

    @property
    def end(self) -> str:
        return self._timestamp(23, 59, 59)

    def _timestamp(self, hour: int, minute: int, second: int) -> str:
        # Formatted by hand: 31/02 must reach the calendar service unchanged
        return (f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
                f"T{hour:02d}:{minute:02d}:{second:02d}Z")

    def __repr__(self):
        return f"ResolvedDate({self.start} -> {self.end})"


def parse_segments(text: str) -> List[Segment]:
    """
    Classify every line of a message

    Lines sharing a DD/MM key collapse into one segment holding the last such
    line, at the position of the first. Empty lines are dropped.
    """
    segments = {}

    for index, line in enumerate(text.split('\n')):
        line = line.rstrip('\r')
        match = DATE_PATTERN.search(line)

        if match:
            date_key = match.group(1)
            segments[date_key] = Segment(line, date_key=date_key)
        elif line:
            segments[f"line:{index}"] = Segment(line, index=index)

    return list(segments.values())


def resolve_date(date_key: str, today: date = None) -> ResolvedDate:
    """
    Resolve a DD/MM key to a whole-day range

    The year is this year, or next year when the zero-based month index is
    greater than the current one-based month, so the month right after the
    current one stays in this year. Day and month are not checked against
    the calendar.
    """
    today = today or date.today()
    day, month = (int(part) for part in date_key.split('/'))

    year = today.year
    if month - 1 > today.month:
        year += 1

    return ResolvedDate(year, month, day)
