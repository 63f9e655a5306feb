"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start (see
flatshortener.server.main) before any other logging is done.

Logging format (one JSON object per line on stdout):
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "flatshortener.server",
    "message": "URL shortener listening on http://localhost:3000"
}

Fields passed through `extra=` are attached to the JSON object as-is, and
`exception` holds the formatted traceback when `exc_info` is set.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from flatshortener.constants import ENV, Defaults


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'message',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging(log_level: str | None = None) -> None:
    """Route all logging through a single JSON stdout handler.

    Args:
        log_level (str | None):
            Root logger level. Falls back to `LOG_LEVEL`, then to INFO.
    """
    level = (log_level or os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL)).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': level,
                'handlers': ['stdout'],
            },
        }
    )
