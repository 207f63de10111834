"""
Flask server for the Google OAuth callback and liveness checks
"""
import logging
import time
from datetime import datetime
from threading import Thread
from typing import Callable, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from config.settings import Config
from src.calendar.authorization import AuthorizationManager
from utils.validators import CallbackValidator

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


class ShortNoteAPI:
    """
    HTTP surface next to the bot: the OAuth redirect target and a liveness route
    """

    def __init__(self, authorization: AuthorizationManager, notifier: Optional[Notifier] = None):
        self.config = Config()
        self.authorization = authorization
        self.notifier = notifier
        self.app = Flask(__name__)
        CORS(self.app)

        self.start_time = time.time()
        self._setup_routes()

    def _setup_routes(self):
        """Setup Flask routes"""

        @self.app.route('/', methods=['GET'])
        def index():
            return "Telegram bot is running", 200, {'Content-Type': 'text/plain; charset=utf-8'}

        @self.app.route('/health', methods=['GET'])
        def health_check():
            """Health check endpoint"""
            return jsonify({
                "status": "healthy",
                "timestamp": datetime.now().isoformat(),
                "uptime": time.time() - self.start_time,
            })

        @self.app.route('/oauth2callback', methods=['GET'])
        def oauth2callback():
            """Google redirects here after the caller grants calendar access"""
            errors = CallbackValidator.validate_callback_args(request.args)
            if errors:
                logger.error(f"Rejected OAuth callback: {'; '.join(errors)}")
                return "Invalid authorization callback", 400, {'Content-Type': 'text/plain; charset=utf-8'}

            try:
                caller_id = self.authorization.complete_authorization(
                    request.args['code'],
                    request.args['state'],
                )
            except Exception as e:
                logger.error(f"Error retrieving access token: {e}")
                return "Authentication failed", 500, {'Content-Type': 'text/plain; charset=utf-8'}

            logger.info(f"✅ OAuth callback completed for {caller_id}")
            self._notify(caller_id, self.config.LOGIN_SUCCESS)
            return self.config.LOGIN_SUCCESS, 200, {'Content-Type': 'text/plain; charset=utf-8'}

        @self.app.errorhandler(404)
        def not_found(error):
            return jsonify({"error": "Endpoint not found"}), 404

        @self.app.errorhandler(500)
        def internal_error(error):
            return jsonify({"error": "Internal server error"}), 500

    def _notify(self, caller_id: str, text: str):
        if self.notifier is None:
            return
        try:
            self.notifier(caller_id, text)
        except Exception as e:
            logger.error(f"Failed to notify {caller_id}: {e}")

    def run(self, host=None, port=None, debug=False):
        """Run the Flask server"""
        host = host or self.config.API_HOST
        port = port or self.config.API_PORT

        logger.info(f"Starting ShortNote callback server on {host}:{port}")

        try:
            self.app.run(
                host=host,
                port=port,
                debug=debug,
                threaded=True,
                use_reloader=False,
            )
        except Exception as e:
            logger.error(f"Failed to start server: {e}")
            raise

    def run_background(self, host=None, port=None):
        """Run the Flask server in background thread"""
        def run_server():
            self.run(host, port, debug=False)

        server_thread = Thread(target=run_server, daemon=True)
        server_thread.start()
        logger.info("Flask server started in background")
        return server_thread


def create_app(authorization: AuthorizationManager, notifier: Optional[Notifier] = None) -> Flask:
    """Factory function to create Flask app"""
    api = ShortNoteAPI(authorization, notifier)
    return api.app
