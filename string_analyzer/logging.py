import importlib.util
import logging
import time
from logging.config import dictConfig
from typing import Any, Dict

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from starlette.middleware.base import BaseHTTPMiddleware

from string_analyzer.config import settings

COLORLOG_AVAILABLE = importlib.util.find_spec("colorlog") is not None

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] in %(module)s: %(message)s"
SLOW_QUERY_THRESHOLD_MS = 200


def build_logging_config(level: str, console_level: str) -> Dict[str, Any]:
    """dictConfig payload: a single console handler, coloured when colorlog is installed."""
    level = level.upper()
    formatters: Dict[str, Any] = {"default": {"format": LOG_FORMAT}}
    if COLORLOG_AVAILABLE:
        formatters["color"] = {
            "()": "colorlog.ColoredFormatter",
            "format": "%(log_color)s" + LOG_FORMAT,
            "log_colors": {
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
        }

    def _app_logger(lvl: str) -> Dict[str, Any]:
        return {"level": lvl, "handlers": ["console"], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "color" if COLORLOG_AVAILABLE else "default",
                "level": console_level.upper(),
            },
        },
        "loggers": {
            # uvicorn access lines duplicate the request middleware
            "uvicorn": {"level": "WARNING"},
            "uvicorn.error": {"level": "WARNING"},
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": _app_logger("WARNING"),
            "string_analyzer": _app_logger(level),
            "string_analyzer.request": _app_logger("INFO"),
            "string_analyzer.db": _app_logger("DEBUG"),
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def init_logging() -> None:
    dictConfig(build_logging_config(settings.LOG_LEVEL, settings.CONSOLE_LOG_LEVEL))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        logger = logging.getLogger("string_analyzer.request")
        start_time = time.time()

        response = await call_next(request)

        duration = (time.time() - start_time) * 1000
        # Filter parameters / the NL query are what explain a given result count
        filters = f" filters={dict(request.query_params)}" if request.query_params else ""
        logger.info(
            "%s %s -> %s (%.2f ms)%s",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            filters,
        )
        return response


def setup_query_logging(engine: Engine):
    """Time every statement on ``engine``; slow ones are logged as warnings."""
    logger = logging.getLogger("string_analyzer.db")

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        context._query_start_time = time.time()

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = (time.time() - context._query_start_time) * 1000
        if total_time > SLOW_QUERY_THRESHOLD_MS:
            logger.warning("Slow query (%.2f ms): %s", total_time, statement)
        else:
            logger.debug("Query (%.2f ms): %s", total_time, statement)
