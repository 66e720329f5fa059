"""Unit tests for JSON logging in logging.py."""

import json
import logging
import sys

import pytest
from freezegun import freeze_time

from linkvault.utils.logging import JsonFormatter, initialize_logging


def make_record(msg: str, *args, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('linkvault.test', logging.INFO, __file__, 10, msg, args, exc_info)
    record.__dict__.update(extra)
    return record


@freeze_time('2026-10-18 12:00:00')
def test_json_formatter():
    record = make_record('Created %s.', 'mapping', shortcode='abc123', attempt=2)

    log = json.loads(JsonFormatter().format(record))

    assert log == {
        'timestamp': '2026-10-18T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'linkvault.test',
        'message': 'Created mapping.',
        'shortcode': 'abc123',
        'attempt': 2,
    }


def test_json_formatter_with_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record('Failed.', exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


def test_json_formatter_serializes_unknown_types():
    record = make_record('Odd extra.', payload={1, 2})
    log = json.loads(JsonFormatter().format(record))
    assert isinstance(log['payload'], str)


@pytest.mark.parametrize('level, expected', [('debug', logging.DEBUG), ('WARNING', logging.WARNING)])
def test_initialize_logging(monkeypatch, level, expected):
    root = logging.getLogger()
    monkeypatch.setattr(root, 'handlers', list(root.handlers))
    monkeypatch.setattr(root, 'level', root.level)
    monkeypatch.setenv('LOG_LEVEL', level)

    initialize_logging()

    assert root.level == expected
    assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)


def test_initialize_logging_quiets_aws_sdk(monkeypatch):
    root = logging.getLogger()
    botocore_logger = logging.getLogger('botocore')
    monkeypatch.setattr(root, 'handlers', list(root.handlers))
    monkeypatch.setattr(root, 'level', root.level)
    monkeypatch.setattr(botocore_logger, 'level', botocore_logger.level)

    initialize_logging(level='debug')

    assert root.level == logging.DEBUG
    assert botocore_logger.level == logging.WARNING
