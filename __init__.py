"""
ShortNote Calendar Bot - turns chat notes into Google Calendar events

This package provides a Telegram bot that:
- Parses multi-line notes for DD/MM dates
- Logs users in to Google Calendar through OAuth
- Creates one private all-day event per dated line
- Reports progress and a summary back in chat
"""

__version__ = "1.0.0"
__author__ = "ShortNote Team"
