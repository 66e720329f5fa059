"""Structured JSON logging for the lambdas

Every record becomes a single JSON line on stdout, which CloudWatch Logs
Insights can query field by field. Context goes into `extra`, never into the
message text:

    >>> logger.info('Created short URL mapping.', extra={'shortcode': 'Gh71WPT', 'attempt': 1})
    {"timestamp": "2026-10-18T12:00:00.000Z", "level": "INFO",
     "logger": "linkvault.services.mapping_service",
     "message": "Created short URL mapping.", "shortcode": "Gh71WPT", "attempt": 1}

IMPORTANT: each lambda package calls `initialize_logging()` from its
`__init__.py`, so logging is configured before the handler module loads.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkvault.constants import ENV


# Attributes every LogRecord carries, anything else was passed via `extra`
RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}

# Chatty third-party loggers kept at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3')


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, including its `extra` fields, as one JSON object"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': _utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Non-serializable extras (datetimes, exceptions, sets) fall back to str()
        return json.dumps(log, default=str, ensure_ascii=False)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging through JsonFormatter to stdout

    Args:
        level (str | None):
            Root log level. Defaults to $LOG_LEVEL, then INFO.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {'level': log_level, 'handlers': ['stdout']},
        }
    )
