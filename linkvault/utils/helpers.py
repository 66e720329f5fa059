"""Request and environment helpers shared by the lambda handlers

Functions:
    base_url(event) -> str
        Public base URL of the API the request came through
    get_short_url(shortcode, event) -> str
        Absolute short URL of a shortcode (used in logs and error messages)
    is_valid_target_url(url) -> bool
        Accept only absolute http(s) URLs of sane length as redirect targets
    require_environment(*names) -> Callable
        Decorator: fail fast when environment variables are missing
    guarantee_500_response(handler) -> Callable
        Decorator: turn unhandled handler errors into a 500 response

Example:
    >>> event = {'requestContext': {'domainName': 'abc123.execute-api.eu-central-1.amazonaws.com', 'stage': 'Prod'}}
    >>> get_short_url('Gh71WPT', event)
    'https://abc123.execute-api.eu-central-1.amazonaws.com/Prod/Gh71WPT'
"""

import os
import json
import logging
import functools
import urllib.parse
from typing import Any
from collections.abc import Callable

from linkvault.constants import Defaults, UNKNOWN_INTERNAL_SERVER_ERROR
from linkvault.exceptions import MissingEnvironmentVariableError
from linkvault.utils.runtime import running_locally


logger = logging.getLogger(__name__)

LOCAL_BASE_URL = 'http://localhost:3000'  # sam local start-api

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',  # TODO: restrict to the frontend domain once it has one
    'Access-Control-Allow-Headers': 'Authorization,Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def base_url(event: dict[str, Any]) -> str:
    """Public base URL of the API the request came through

    Default execute-api domains serve each stage under its own path segment.
    Custom domains map stages through base path mappings, so the stage
    never shows up in their URLs.

    Examples:
        'https://abc123.execute-api.eu-central-1.amazonaws.com/Prod'
        'https://links.example.com'
        'http://localhost:3000' (no domain: SAM CLI, tests)
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName')
    if not domain:
        return LOCAL_BASE_URL
    if 'execute-api' in domain:
        return f'https://{domain}/{request_context.get("stage", "")}'.rstrip('/')
    return f'https://{domain}'


def get_short_url(shortcode: str, event: dict[str, Any]) -> str:
    return f'{base_url(event)}/{shortcode}'


def is_valid_target_url(url: Any, max_length: int = Defaults.MAX_TARGET_URL_LENGTH) -> bool:
    """Check that a target URL can be safely used as a redirect destination

    Args:
        url (Any): candidate target URL
        max_length (int): maximum accepted length

    Returns:
        bool: True for absolute http(s) URLs with a host, no whitespace and
              at most `max_length` characters.

    Example:
        >>> is_valid_target_url('https://example.com/page?id=1')
        True
        >>> is_valid_target_url('javascript:alert(1)')
        False
    """
    if not isinstance(url, str) or not url or len(url) > max_length:
        return False
    if any(char.isspace() for char in url):
        return False

    try:
        components = urllib.parse.urlsplit(url)
    except ValueError:
        return False
    return components.scheme in {'http', 'https'} and bool(components.netloc)


def missing_environment(*names: str) -> list[str]:
    """Names among `names` that are unset or empty"""
    return [name for name in names if not os.environ.get(name)]


def require_environment(*names: str) -> Callable:
    """Decorator: raise MissingEnvironmentVariableError before the call if any of `names` is unset or empty

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def fetch():
        ...     ...
        >>> fetch()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if missing := missing_environment(*names):
                listed = ', '.join(repr(name) for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {listed}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 instead of crashing on unhandled errors

    When running locally the original exception is re-raised, so SAM shows
    the traceback.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception as e:
            if running_locally():
                raise
            logger.exception(
                'Unhandled error in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'error': e.__class__.__name__},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
                'body': json.dumps({'message': 'Internal Server Error', 'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR}),
            }

    return wrapper
