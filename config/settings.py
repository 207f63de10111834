"""
Configuration settings for the ShortNote Calendar Bot
"""
import os
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()


class Config:
    # Telegram Configuration
    TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")

    # Google OAuth Configuration
    GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI = os.getenv("GOOGLE_REDIRECT_URI", "http://localhost:3000/oauth2callback")
    GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
    GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
    SCOPES: List[str] = ["https://www.googleapis.com/auth/calendar"]

    # Credential storage (caller id -> credential pair)
    CREDENTIALS_DB_PATH = os.getenv("CREDENTIALS_DB_PATH", "db.json")

    # API Configuration
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("PORT", "3000"))

    # Calendar Configuration
    CALENDAR_ID = "primary"
    TIMEZONE = "Asia/Ho_Chi_Minh"
    EVENT_TYPE = "focusTime"
    EVENT_VISIBILITY = "private"

    # Reply rendering
    SUMMARY_PREVIEW_LENGTH = 15
    PROGRESS_BAR_CELLS = 10

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    # Chat messages
    LOGIN_PROMPT = "You must login to use this function"
    LOGIN_BUTTON_TEXT = "Authenticate"
    LOGIN_SUCCESS = "Login successful! You can now create calendar events with the bot."
    WELCOME_MESSAGE = "Welcome to the Calendar Bot!"
    PROCESSING_MESSAGE = "Processing..."

    @classmethod
    def get_client_config(cls) -> Dict[str, Dict]:
        """Get OAuth client configuration for the Google login flow"""
        return {
            "web": {
                "client_id": cls.GOOGLE_CLIENT_ID,
                "client_secret": cls.GOOGLE_CLIENT_SECRET,
                "auth_uri": cls.GOOGLE_AUTH_URI,
                "token_uri": cls.GOOGLE_TOKEN_URI,
                "redirect_uris": [cls.GOOGLE_REDIRECT_URI],
            }
        }

    @classmethod
    def validate(cls) -> List[str]:
        """Return the names of required settings that are missing"""
        required = {
            "TELEGRAM_BOT_TOKEN": cls.TELEGRAM_BOT_TOKEN,
            "GOOGLE_CLIENT_ID": cls.GOOGLE_CLIENT_ID,
            "GOOGLE_CLIENT_SECRET": cls.GOOGLE_CLIENT_SECRET,
        }
        return [name for name, value in required.items() if not value]
