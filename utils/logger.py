"""
Logging utilities for the ShortNote Calendar Bot
"""
import logging
import sys


class ShortNoteLogger:
    """Root logger setup shared by the bot, the callback server and the CLI"""

    @staticmethod
    def setup_logging(log_level: str = "INFO", log_file: str = None):
        """Setup logging configuration"""

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, log_level.upper()))

        # Clear existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        # Suppress some noisy loggers
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('googleapiclient').setLevel(logging.WARNING)
        logging.getLogger('httpx').setLevel(logging.WARNING)
        logging.getLogger('telegram').setLevel(logging.WARNING)

        return root_logger

    @staticmethod
    def log_outcome(caller_id: str, outcome, processing_time: float):
        """Log the tally of one processed message"""
        logger = logging.getLogger(__name__)
        logger.info(
            f"📊 Message from {caller_id} processed in {processing_time:.2f}s: "
            f"{outcome.completed}/{outcome.total} events created, "
            f"{len(outcome.other)} other notes"
        )
