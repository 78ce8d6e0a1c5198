"""Utility functions and helpers."""

from .logging_handler import StreamlitLogHandler, setup_logging
from .text_utils import interpolate, split_text_smart

__all__ = [
    "StreamlitLogHandler",
    "setup_logging",
    "interpolate",
    "split_text_smart",
]
