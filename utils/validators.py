"""
Validation utilities for the ShortNote Calendar Bot
"""
import html
import json
from typing import Any, Dict, List, Optional


class CallbackValidator:
    """Validator for the OAuth callback query"""

    STATE_KEY = "callerId"

    @staticmethod
    def build_state(caller_id) -> str:
        """Encode the caller id into the opaque OAuth state blob"""
        return json.dumps({CallbackValidator.STATE_KEY: caller_id})

    @staticmethod
    def parse_state(state: str) -> Optional[str]:
        """Return the caller id carried by the state blob, or None if malformed"""
        try:
            payload = json.loads(state)
        except (TypeError, ValueError):
            return None

        if not isinstance(payload, dict):
            return None

        caller_id = payload.get(CallbackValidator.STATE_KEY)
        if caller_id is None or caller_id == "":
            return None
        return str(caller_id)

    @staticmethod
    def validate_callback_args(args: Dict[str, Any]) -> List[str]:
        """Validate callback query parameters and return list of errors"""
        errors = []

        if not args.get("code"):
            errors.append("Missing required parameter: code")

        state = args.get("state")
        if not state:
            errors.append("Missing required parameter: state")
        elif CallbackValidator.parse_state(state) is None:
            errors.append(f"Invalid state: {state}")

        return errors


class DataSanitizer:
    """Sanitize text before it is embedded in chat markup"""

    @staticmethod
    def escape_html(text: str) -> str:
        """Escape text for Telegram HTML parse mode"""
        return html.escape(text, quote=True)

    @staticmethod
    def truncate_summary(summary: str, length: int = 15) -> str:
        """First `length` characters followed by an ellipsis"""
        return (summary or "")[:length] + "..."
