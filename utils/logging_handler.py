"""
Logging setup for the app, including a handler that feeds the in-app
debug console through Streamlit session state.
"""

import logging
from collections import deque
from datetime import datetime

import streamlit as st
from streamlit.runtime.scriptrunner import get_script_run_ctx

APP_LOGGER_NAME = "UrbanPulse"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class StreamlitLogHandler(logging.Handler):
    """
    Writes log records into a ring buffer in st.session_state.

    Records emitted outside a Streamlit script thread (background tasks,
    tests) are dropped.
    """

    def __init__(self, level: int = logging.DEBUG, max_logs: int = 200):
        super().__init__(level)
        self.max_logs = max_logs

    def emit(self, record: logging.LogRecord) -> None:
        if get_script_run_ctx() is None:
            return

        try:
            if "logs" not in st.session_state:
                st.session_state.logs = deque(maxlen=self.max_logs)

            st.session_state.logs.append({
                "timestamp": datetime.fromtimestamp(record.created).strftime("%H:%M:%S"),
                "level": record.levelname,
                "message": self.format(record),
                "logger": record.name,
            })
        except Exception:
            self.handleError(record)


def setup_logging(level: str = "INFO", app_name: str = APP_LOGGER_NAME) -> logging.Logger:
    """
    Configure the application logger with console and debug-console handlers.

    Every module logs under ``<app_name>.<Component>``, so configuring the
    parent is enough. Safe to call on every Streamlit rerun.
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Streamlit reruns the script; avoid stacking handlers
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    streamlit_handler = StreamlitLogHandler()
    streamlit_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(streamlit_handler)

    return logger


def get_log_entries() -> list:
    if "logs" not in st.session_state:
        return []
    return list(st.session_state.logs)


def clear_logs() -> None:
    if "logs" in st.session_state:
        st.session_state.logs.clear()
