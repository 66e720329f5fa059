"""Application configuration from AWS AppConfig

One AppConfig *Application* (named after `APP_NAME`) holds an *Environment*
per `APP_ENV`. Its `backend-config` profile is a single JSON document shared
by all lambdas, each reading only its own section:

    {
        "build": "2026.10.1",
        "active_backend": "dynamodb",
        "configs": {
            "shorten_url": {
                "dynamodb": {"table_name": "linkvault-links", "region_name": "eu-central-1"},
                "redis": { ... },
                "cache": {"enabled": true, "host": "...", "port": 6379, "db": 0, "ttl": 86400},
                "service": {"shortcode_length": 7, "max_create_attempts": 5,
                            "retry": {"total": 3, "base": 0.05, "cap": 0.5}}
            },
            "redirect_url": { ... }
        }
    }

Sources:
    - AWS AppConfig Data API (boto3 'appconfigdata'), in AWS.
    - A local AppConfig agent container, under `sam local` when
      APPCONFIG_AGENT_URL points at it.

Example:
    >>> settings = ServiceSettings.from_config(load_config('shorten_url'))
    >>> settings.backend
    <Backend.DYNAMODB: 'dynamodb'>
"""

import os
import json
import urllib.parse
import urllib.request
import logging
from dataclasses import dataclass, field
from typing import Any

import boto3

from linkvault.types import AppConfig, LambdaConfiguration
from linkvault.constants import Backend, Defaults, ENV
from linkvault.dao.cache.constants import DEFAULT_CACHE_TTL
from linkvault.exceptions import BadConfigurationError
from linkvault.utils.helpers import require_environment
from linkvault.utils.retry import RetryPolicy
from linkvault.utils.runtime import running_locally


logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = 'backend-config'

# Only a co-located agent container may serve configuration
LOCAL_AGENT_HOSTS = frozenset({'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'})
LOCAL_AGENT_PORTS = frozenset({2772, None})


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Key namespace '<app name>:<app env>' for Redis-backed DAOs, None without APP_NAME

    Example:
        >>> os.environ['APP_NAME'] = 'linkvault'
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_prefix()
        'linkvault:dev'
    """
    name = app_name()
    return f'{name}:{app_env()}' if name is not None else None


def _lambda_section(document: AppConfig, lambda_name: str) -> LambdaConfiguration:
    """Extract the active backend and a lambda's section from an AppConfig document"""
    try:
        backend = document['active_backend']
        section = document['configs'][lambda_name]
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no 'active_backend' or section for {lambda_name!r}.") from e
    return {'active_backend': backend, **section}


def _local_agent_url() -> str | None:
    """APPCONFIG_AGENT_URL when running locally, None otherwise

    Raises:
        BadConfigurationError:
            If the URL doesn't point at a local agent.
    """
    url = os.getenv(ENV.AppConfig.AGENT_URL)
    if not url or not running_locally():
        return None

    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'} or components.hostname not in LOCAL_AGENT_HOSTS:
        raise BadConfigurationError(f'APPCONFIG_AGENT_URL must point at a local AppConfig agent (given value: {url!r}).')
    if components.port not in LOCAL_AGENT_PORTS:
        raise BadConfigurationError(f'APPCONFIG_AGENT_URL must use the agent port 2772 (given value: {url!r}).')
    return url.rstrip('/')


def _fetch_from_agent(agent_url: str) -> AppConfig:  # pragma: no cover
    profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, DEFAULT_PROFILE_NAME)
    url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

    logger.debug('Fetching AppConfig from local agent.', extra={'agentUrl': url})
    with urllib.request.urlopen(url, timeout=5) as response:  # noqa: S310
        return json.load(response)


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def _fetch_from_appconfig() -> AppConfig:
    logger.debug('Fetching AppConfig from AWS AppConfig.')
    client = boto3.client('appconfigdata')

    token = client.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']
    payload = client.get_latest_configuration(ConfigurationToken=token)['Configuration'].read()
    return json.loads(payload.decode('utf-8'))


def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load a lambda's section of the AppConfig document

    Args:
        lambda_name (str):
            Section to load, e.g. 'shorten_url' or 'redirect_url'.

    Returns:
        LambdaConfiguration: the section with the document's 'active_backend' attached.

    Raises:
        MissingEnvironmentVariableError:
            If APPCONFIG_APP_ID, APPCONFIG_ENV_ID or APPCONFIG_PROFILE_ID is
            missing (AWS AppConfig source only).
        BadConfigurationError:
            If the document lacks 'active_backend' or the lambda's section,
            or APPCONFIG_AGENT_URL isn't a local agent.
        botocore.exceptions.ClientError:
            If AWS AppConfig rejects the request.

    Example:
        >>> load_config('shorten_url')['dynamodb']['table_name']
        'linkvault-links'
    """
    agent_url = _local_agent_url()
    document = _fetch_from_agent(agent_url) if agent_url else _fetch_from_appconfig()

    section = _lambda_section(document, lambda_name)
    logger.debug(
        'Loaded AppConfig.',
        extra={'lambdaName': lambda_name, 'build': document.get('build'), 'source': 'agent' if agent_url else 'appconfig'},
    )
    return section




def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise BadConfigurationError(f'{key!r} must be a positive integer (given value: {value!r}).')
    return value


def _non_negative_number(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
        raise BadConfigurationError(f'{key!r} must be a non-negative number (given value: {value!r}).')
    return float(value)


@dataclass(frozen=True)
class ServiceSettings:
    """Validated settings the mapping service is built from

    Attributes:
        backend (Backend):
            Durable store backend ('dynamodb' or 'redis').
        store (dict[str, Any]):
            Connection parameters of the durable store backend.
        cache (dict[str, Any]):
            Connection parameters of the Redis cache (without 'enabled'/'ttl').
        cache_enabled (bool):
            False disables the cache entirely (NullUrlCacheDAO).
        cache_ttl (int):
            Seconds cached entries live.
        shortcode_length (int):
            Length of generated shortcodes.
        max_create_attempts (int):
            Fresh shortcodes tried per create before CapacityError.
        retry_policy (RetryPolicy):
            Backoff policy for transient durable store errors.
    """

    backend: Backend
    store: dict[str, Any] = field(default_factory=dict)
    cache: dict[str, Any] = field(default_factory=dict)
    cache_enabled: bool = False
    cache_ttl: int = DEFAULT_CACHE_TTL
    shortcode_length: int = Defaults.SHORTCODE_LENGTH
    max_create_attempts: int = Defaults.MAX_CREATE_ATTEMPTS
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_config(cls, config: LambdaConfiguration) -> 'ServiceSettings':
        """Validate a lambda's configuration section

        Args:
            config (LambdaConfiguration):
                Output of load_config().

        Returns:
            ServiceSettings: validated settings.

        Raises:
            BadConfigurationError:
                If the backend is unknown, its section is missing, or any
                numeric parameter is out of range.
        """
        try:
            backend = Backend(config.get('active_backend'))
        except ValueError as e:
            supported = ', '.join(repr(b.value) for b in Backend)
            raise BadConfigurationError(f"Unsupported 'active_backend' {config.get('active_backend')!r} (supported: {supported}).") from e

        store = config.get(backend.value)
        if not isinstance(store, dict):
            raise BadConfigurationError(f'Missing configuration section for backend {backend.value!r}.')
        if backend is Backend.DYNAMODB and not store.get('table_name'):
            raise BadConfigurationError("DynamoDB backend requires a 'table_name'.")

        cache = dict(config.get('cache') or {})
        cache_enabled = bool(cache.pop('enabled', bool(cache)))
        cache_ttl = _positive_int(cache, 'ttl', DEFAULT_CACHE_TTL)
        cache.pop('ttl', None)

        service = config.get('service') or {}
        retry = service.get('retry') or {}
        retry_policy = RetryPolicy(
            total=int(_non_negative_number(retry, 'total', Defaults.RETRY_TOTAL)),
            base=_non_negative_number(retry, 'base', Defaults.RETRY_BASE),
            cap=_non_negative_number(retry, 'cap', Defaults.RETRY_CAP),
            jitter=bool(retry.get('jitter', True)),
        )

        return cls(
            backend=backend,
            store=dict(store),
            cache=cache,
            cache_enabled=cache_enabled,
            cache_ttl=cache_ttl,
            shortcode_length=_positive_int(service, 'shortcode_length', Defaults.SHORTCODE_LENGTH),
            max_create_attempts=_positive_int(service, 'max_create_attempts', Defaults.MAX_CREATE_ATTEMPTS),
            retry_policy=retry_policy,
        )
