import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter

DEFAULT_LOG_LEVEL = "INFO"


def _level_from_env() -> int:
    name = os.getenv("CLINIC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging():
    """
    Configures structured JSON logging for the dashboard service.

    Every record goes to stdout as JSON with timestamp, level, logger name,
    message, trace_id and span_id. The dashboard loggers and uvicorn share
    the handler and the level set by `CLINIC_LOG_LEVEL` (unknown names fall
    back to INFO). httpx stays at WARNING since the API client logs each
    request itself.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level = _level_from_env()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        server_logger = logging.getLogger(name)
        server_logger.setLevel(level)
        server_logger.handlers = [handler]
        server_logger.propagate = False

    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger
