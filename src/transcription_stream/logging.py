import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
SERVER_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

_json_handler: logging.Handler | None = None


def setup_logging() -> logging.Logger:
    """
    Routes application and server logs to one JSON stdout handler.

    The handler is installed on the first call, replacing the root logger's
    handlers and detaching the Uvicorn loggers from theirs. Later calls only
    return the root logger, so every module can call this at import time.
    The level comes from `LOG_LEVEL` (default `INFO`).

    Returns:
        logging.Logger: The root logger.
    """
    global _json_handler

    root_logger = logging.getLogger()
    if _json_handler is not None:
        return root_logger

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    _json_handler = logging.StreamHandler(sys.stdout)
    _json_handler.setFormatter(JsonFormatter(LOG_FORMAT))

    root_logger.setLevel(level)
    root_logger.handlers = [_json_handler]

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.setLevel(level)
        server_logger.handlers = [_json_handler]
        server_logger.propagate = False

    return root_logger
