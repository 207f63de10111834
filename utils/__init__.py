"""
Utility modules for ShortNote Calendar Bot
"""

from .logger import ShortNoteLogger
from .validators import CallbackValidator, DataSanitizer

__all__ = ['ShortNoteLogger', 'CallbackValidator', 'DataSanitizer']
