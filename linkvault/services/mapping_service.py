"""URL mapping service: shortcode creation and resolution

The service combines an authoritative durable store with a best-effort cache
(cache-aside):

    create(target):
        generate code -> put_if_absent in durable store -> populate cache
        A taken code is retried with a fresh one, up to `max_attempts` codes.

    resolve(shortcode):
        cache -> (miss) durable store -> backfill cache

Consistency contract:
    - The durable store is the single point of uniqueness. The cache is never
      asked whether a code is free.
    - Targets are immutable per shortcode, so racing cache writes always
      converge on the same value and a cached entry is never wrong.
    - Cache failures are logged and swallowed. They never change the outcome.
    - Durable store failures are retried with backoff when transient and
      surface as DependencyError once retries (or the deadline) run out.

Example:
    >>> service = UrlMappingService(
    ...     store=UrlMappingDynamoDBDAO(table_name='linkvault-links'),
    ...     cache=UrlCacheRedisDAO(redis_host='cache.internal', prefix='linkvault:dev'),
    ... )
    >>> shortcode = service.create('https://example.com')
    >>> service.resolve(shortcode)
    'https://example.com'
"""

import logging
import time
from collections.abc import Callable
from datetime import datetime, UTC
from typing import TypeVar

from linkvault.constants import Defaults
from linkvault.models import UrlMapping
from linkvault.dao.base import UrlCacheBaseDAO, UrlMappingBaseDAO, PutResult
from linkvault.dao.cache import NullUrlCacheDAO
from linkvault.dao.cache.constants import DEFAULT_CACHE_TTL
from linkvault.dao.exceptions import CacheError, DataStoreError, TransientDataStoreError
from linkvault.exceptions import CapacityError, ConflictError, DependencyError, NotFoundError
from linkvault.utils.retry import RetryPolicy, call_with_retry
from linkvault.utils.shortener import ShortcodeGenerator


logger = logging.getLogger(__name__)

T = TypeVar('T')


def _is_transient(error: Exception) -> bool:
    return isinstance(error, TransientDataStoreError)


class UrlMappingService:
    """Create and resolve shortcode -> target URL mappings

    All collaborators are explicit handles, constructed once per process and
    shared across calls. The service keeps no mutable state of its own, so a
    single instance is safe to use from concurrent callers.

    Attributes:
        store (UrlMappingBaseDAO):
            Durable, strongly consistent store. Source of truth.
        cache (UrlCacheBaseDAO):
            Best-effort cache. Defaults to NullUrlCacheDAO.
        generator (ShortcodeGenerator):
            Source of candidate shortcodes.
        cache_ttl (int):
            TTL in seconds for cache entries written by the service.
        max_attempts (int):
            Candidate shortcodes tried per create before CapacityError.
        retry_policy (RetryPolicy):
            Backoff policy for transient durable store errors.

    Methods:
        create(target: str, deadline: float | None = None) -> str
        resolve(shortcode: str, deadline: float | None = None) -> str
    """

    def __init__(
        self,
        store: UrlMappingBaseDAO,
        cache: UrlCacheBaseDAO | None = None,
        generator: ShortcodeGenerator | None = None,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        max_attempts: int = Defaults.MAX_CREATE_ATTEMPTS,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.store = store
        self.cache = cache if cache is not None else NullUrlCacheDAO()
        self.generator = generator if generator is not None else ShortcodeGenerator()
        self.cache_ttl = cache_ttl
        self.max_attempts = max_attempts
        self.retry_policy = retry_policy if retry_policy is not None else RetryPolicy()
        self._sleep = sleep
        self._clock = clock

    def create(self, target: str, deadline: float | None = None) -> str:
        """Bind a target URL to a fresh shortcode

        Steps:
            1. Generate a candidate shortcode.
            2. put_if_absent into the durable store.
            3. On CREATED: populate the cache (best effort) and return the code.
               On ALREADY_EXISTS: go back to 1 with a fresh code.
            4. After `max_attempts` taken codes: raise CapacityError.

        Args:
            target (str):
                The long URL to shorten.
            deadline (float | None):
                Point on the service clock after which no store retry is started.

        Returns:
            str: the new shortcode.

        Raises:
            ValueError:
                If `target` is empty.
            CapacityError:
                If every candidate shortcode was already taken.
            DependencyError:
                If the durable store keeps failing.
        """
        if not target:
            raise ValueError('Target URL must be a non-empty string.')

        for attempt in range(1, self.max_attempts + 1):
            mapping = UrlMapping(shortcode=self.generator.generate(), target=target, created_at=datetime.now(UTC))
            try:
                self._insert(mapping, deadline=deadline)
            except ConflictError:
                logger.info(
                    'Shortcode collision. Retrying with a fresh shortcode.',
                    extra={'shortcode': mapping.shortcode, 'attempt': attempt, 'maxAttempts': self.max_attempts},
                )
                continue

            logger.info('Created short URL mapping.', extra={'shortcode': mapping.shortcode, 'attempt': attempt})
            self._populate_cache(mapping.shortcode, target)
            return mapping.shortcode

        logger.error('Exhausted shortcode attempts.', extra={'maxAttempts': self.max_attempts})
        raise CapacityError(f'No free shortcode found after {self.max_attempts} attempts.')

    def resolve(self, shortcode: str, deadline: float | None = None) -> str:
        """Return the target URL bound to a shortcode

        Steps:
            1. Cache hit: return immediately, the durable store isn't touched.
            2. Cache miss (or cache failure): read the durable store.
            3. Found: backfill the cache (best effort) and return the target.
            4. Absent: raise NotFoundError.

        Args:
            shortcode (str):
                The shortcode to resolve.
            deadline (float | None):
                Point on the service clock after which no store retry is started.

        Returns:
            str: the target URL.

        Raises:
            NotFoundError:
                If no mapping exists for the shortcode.
            DependencyError:
                If the durable store keeps failing.
        """
        if not shortcode:
            raise NotFoundError('Empty shortcode.')

        target = self._read_cache(shortcode)
        if target is not None:
            logger.debug('Cache hit.', extra={'shortcode': shortcode})
            return target

        logger.debug('Cache miss. Reading durable store.', extra={'shortcode': shortcode})
        mapping = self._call_store(lambda: self.store.get(shortcode), deadline=deadline)
        if mapping is None:
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.")

        self._populate_cache(shortcode, mapping.target)
        return mapping.target

    def _insert(self, mapping: UrlMapping, deadline: float | None) -> None:
        result = self._call_store(lambda: self.store.put_if_absent(mapping), deadline=deadline)
        if result is PutResult.ALREADY_EXISTS:
            raise ConflictError(f"Shortcode '{mapping.shortcode}' is already bound.")

    def _call_store(self, fn: Callable[[], T], deadline: float | None) -> T:
        """Run a durable store call under the retry policy, mapping failures to DependencyError"""
        try:
            return call_with_retry(
                fn,
                policy=self.retry_policy,
                retry_on=self._log_retry,
                deadline=deadline,
                sleep=self._sleep,
                clock=self._clock,
            )
        except DataStoreError as e:
            logger.error('Durable store failed.', extra={'error': e.__class__.__name__, 'reason': str(e)})
            raise DependencyError(f'Durable store unavailable: {e}') from e

    @staticmethod
    def _log_retry(error: Exception) -> bool:
        if not _is_transient(error):
            return False
        logger.warning('Transient durable store error. Retrying with backoff.', extra={'reason': str(error)})
        return True

    def _read_cache(self, shortcode: str) -> str | None:
        try:
            return self.cache.get(shortcode)
        except CacheError as e:
            logger.warning('Cache read failed. Falling back to durable store.', extra={'shortcode': shortcode, 'reason': str(e)})
            return None

    def _populate_cache(self, shortcode: str, target: str) -> None:
        """Write a cache entry without ever affecting the caller's outcome"""
        try:
            self.cache.set(shortcode, target, self.cache_ttl)
        except CacheError as e:
            logger.warning('Cache write failed. Ignoring.', extra={'shortcode': shortcode, 'reason': str(e)})
