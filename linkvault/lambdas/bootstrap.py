"""Process-wide construction of the mapping service

Lambda reuses an execution environment across invocations, so clients are
built once per process and shared by every invocation it serves. Nothing is
created at import time: the first call to `mapping_service()` builds the
handles, later calls return the same instance. A failed build is not cached
and is attempted again by the next invocation.

Functions:
    build_mapping_store(settings, prefix=None) -> UrlMappingBaseDAO
    build_url_cache(settings, prefix=None) -> UrlCacheBaseDAO
    build_mapping_service(config, prefix=None) -> UrlMappingService
    mapping_service(lambda_name) -> UrlMappingService
"""

import functools
import logging

from linkvault.constants import Backend
from linkvault.types import LambdaConfiguration
from linkvault.dao.base import UrlCacheBaseDAO, UrlMappingBaseDAO
from linkvault.dao.cache import UrlCacheRedisDAO, NullUrlCacheDAO
from linkvault.dao.dynamodb import UrlMappingDynamoDBDAO
from linkvault.dao.redis import UrlMappingRedisDAO
from linkvault.exceptions import BadConfigurationError
from linkvault.services import UrlMappingService
from linkvault.utils.config import ServiceSettings, app_prefix, load_config
from linkvault.utils.shortener import ShortcodeGenerator


logger = logging.getLogger(__name__)


def _redis_kwargs(section: dict) -> dict:
    return {f'redis_{k}': v for k, v in section.items()}


def build_mapping_store(settings: ServiceSettings, prefix: str | None = None) -> UrlMappingBaseDAO:
    """Create the durable store DAO selected by `settings.backend`

    Raises:
        BadConfigurationError:
            If the backend section holds parameters the DAO doesn't accept.
        DataStoreError:
            If the Redis backend can't be reached.
    """
    try:
        if settings.backend is Backend.DYNAMODB:
            return UrlMappingDynamoDBDAO(**settings.store)
        return UrlMappingRedisDAO(**_redis_kwargs(settings.store), prefix=prefix)
    except TypeError as e:
        raise BadConfigurationError(f'Invalid {settings.backend.value!r} configuration: {e}') from e


def build_url_cache(settings: ServiceSettings, prefix: str | None = None) -> UrlCacheBaseDAO:
    if not settings.cache_enabled:
        logger.info('Cache disabled. Every resolve reads the durable store.')
        return NullUrlCacheDAO()

    try:
        return UrlCacheRedisDAO(**_redis_kwargs(settings.cache), prefix=prefix)
    except TypeError as e:
        raise BadConfigurationError(f"Invalid 'cache' configuration: {e}") from e


def build_mapping_service(config: LambdaConfiguration, prefix: str | None = None) -> UrlMappingService:
    """Validate a lambda's configuration and wire the service from it

    Args:
        config (LambdaConfiguration):
            Output of load_config().
        prefix (str | None):
            Key namespace for Redis backed DAOs (see app_prefix()).

    Returns:
        UrlMappingService: service with its store, cache and generator handles.
    """
    settings = ServiceSettings.from_config(config)
    service = UrlMappingService(
        store=build_mapping_store(settings, prefix=prefix),
        cache=build_url_cache(settings, prefix=prefix),
        generator=ShortcodeGenerator(length=settings.shortcode_length),
        cache_ttl=settings.cache_ttl,
        max_attempts=settings.max_create_attempts,
        retry_policy=settings.retry_policy,
    )
    logger.info(
        'Initialized URL mapping service.',
        extra={'backend': settings.backend.value, 'cacheEnabled': settings.cache_enabled},
    )
    return service


@functools.cache
def mapping_service(lambda_name: str) -> UrlMappingService:
    """Return the process-wide mapping service for a lambda, building it on first use"""
    return build_mapping_service(load_config(lambda_name), prefix=app_prefix())
