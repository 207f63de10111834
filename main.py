#!/usr/bin/env python3
"""
Main entry point for the ShortNote Calendar Bot

Runs the Telegram bot together with the OAuth callback server, or parses a
note offline to show the events it would create.
"""

import sys
import json
import logging
from pathlib import Path

# Add the project directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import Config
from src.api.flask_server import ShortNoteAPI
from src.calendar.authorization import AuthorizationManager
from src.calendar.credential_store import JsonFileCredentialStore
from src.scheduler.note_pipeline import build_requests
from utils.logger import ShortNoteLogger


def run_server(host=None, port=None, mock_calendar=False):
    """Run the callback server in the background and poll Telegram"""
    from src.bot.telegram_bot import ShortNoteBot

    ShortNoteLogger.setup_logging(log_level=Config.LOG_LEVEL, log_file=Config.LOG_FILE)
    logger = logging.getLogger(__name__)

    missing = Config.validate()
    if mock_calendar:
        missing = [name for name in missing if not name.startswith("GOOGLE_")]
    if missing:
        logger.error(f"Missing required settings: {', '.join(missing)}")
        sys.exit(1)

    if mock_calendar:
        from src.calendar.mock_calendar_manager import MockCalendarManager
        calendar_manager = MockCalendarManager()
        logger.info("Using in-memory mock calendar")
    else:
        from src.calendar.calendar_manager import CalendarManager
        calendar_manager = CalendarManager()

    store = JsonFileCredentialStore(Config.CREDENTIALS_DB_PATH)
    authorization = AuthorizationManager(calendar_manager, store)

    bot = ShortNoteBot(Config.TELEGRAM_BOT_TOKEN, authorization, calendar_manager)
    api = ShortNoteAPI(authorization, notifier=bot.notify)

    logger.info("Starting ShortNote Calendar Bot...")
    try:
        api.run_background(host=host, port=port)
        bot.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Server error: {e}")
        raise


def parse_note(text):
    """Event payloads and plain notes for a message, without contacting any service"""
    requests, notes = build_requests(text)
    return {
        "events": [request.to_dict() for request in requests],
        "notes": notes,
    }


def run_tests(api_url="http://localhost:3000"):
    """Run smoke tests against a running callback server"""
    from tests.test_client import ShortNoteSmokeClient

    ShortNoteLogger.setup_logging(log_level="INFO")
    logger = logging.getLogger(__name__)

    logger.info(f"Running tests against {api_url}")

    client = ShortNoteSmokeClient(api_url)
    results = client.run_test_suite()

    summary = results["summary"]
    print(f"\nTest Results:")
    print(f"  Total: {summary['total']}")
    print(f"  Passed: {summary['passed']}")
    print(f"  Failed: {summary['failed']}")

    return results


def main():
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='ShortNote Calendar Bot')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Server command
    server_parser = subparsers.add_parser('server', help='Run the Telegram bot and OAuth callback server')
    server_parser.add_argument('--host', default=None, help='Host to bind to')
    server_parser.add_argument('--port', type=int, default=None, help='Port to bind to')
    server_parser.add_argument('--mock-calendar', action='store_true', help='Use the in-memory calendar')

    # Test command
    test_parser = subparsers.add_parser('test', help='Run smoke tests against a running server')
    test_parser.add_argument('--url', default='http://localhost:3000', help='Server URL to test')

    # Parse command (for a single note)
    parse_parser = subparsers.add_parser('parse', help='Show the events a note would create')
    parse_parser.add_argument('input_file', help='Text file holding the note')
    parse_parser.add_argument('--output', help='Output JSON file')

    args = parser.parse_args()

    if args.command == 'server':
        run_server(host=args.host, port=args.port, mock_calendar=args.mock_calendar)

    elif args.command == 'test':
        run_tests(api_url=args.url)

    elif args.command == 'parse':
        with open(args.input_file, 'r', encoding='utf-8') as f:
            result = parse_note(f.read())

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(result, f, indent=2, ensure_ascii=False)
        else:
            print(json.dumps(result, indent=2, ensure_ascii=False))

    else:
        parser.print_help()


if __name__ == '__main__':
    main()
