"""Shared fixtures: in-memory durable store and cache

The fakes honour the same contracts as the real DAOs (atomic put_if_absent,
CacheError on cache failures) and count calls so tests can assert which
layer served a request.
"""

import threading

import pytest

from linkvault.models import UrlMapping
from linkvault.dao.base import UrlCacheBaseDAO, UrlMappingBaseDAO, PutResult
from linkvault.dao.exceptions import CacheError


class InMemoryMappingStore(UrlMappingBaseDAO):
    """Thread-safe durable store. Queued `failures` are raised before serving calls."""

    def __init__(self):
        self.items: dict[str, UrlMapping] = {}
        self.failures: list[Exception] = []
        self.put_calls = 0
        self.get_calls = 0
        self._lock = threading.Lock()

    def put_if_absent(self, mapping: UrlMapping, **kwargs) -> PutResult:
        with self._lock:
            self.put_calls += 1
            if self.failures:
                raise self.failures.pop(0)
            if mapping.shortcode in self.items:
                return PutResult.ALREADY_EXISTS
            self.items[mapping.shortcode] = mapping
            return PutResult.CREATED

    def get(self, shortcode: str, **kwargs) -> UrlMapping | None:
        with self._lock:
            self.get_calls += 1
            if self.failures:
                raise self.failures.pop(0)
            return self.items.get(shortcode)


class InMemoryUrlCache(UrlCacheBaseDAO):
    def __init__(self):
        self.entries: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.get_calls = 0
        self.set_calls = 0
        self._lock = threading.Lock()

    def get(self, shortcode: str) -> str | None:
        with self._lock:
            self.get_calls += 1
            if self.fail_reads:
                raise CacheError('Cache at cache.test:6379/0 failed: Connection refused')
            return self.entries.get(shortcode)

    def set(self, shortcode: str, target: str, ttl: int) -> None:
        with self._lock:
            self.set_calls += 1
            if self.fail_writes:
                raise CacheError('Cache at cache.test:6379/0 failed: Connection refused')
            self.entries[shortcode] = target
            self.ttls[shortcode] = ttl


class ScriptedGenerator:
    """Shortcode generator returning a fixed sequence of codes"""

    def __init__(self, codes: list[str]):
        self.codes = list(codes)
        self.calls = 0
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            code = self.codes[self.calls]
            self.calls += 1
            return code


@pytest.fixture
def store() -> InMemoryMappingStore:
    return InMemoryMappingStore()


@pytest.fixture
def cache() -> InMemoryUrlCache:
    return InMemoryUrlCache()


@pytest.fixture
def scripted_generator() -> type[ScriptedGenerator]:
    return ScriptedGenerator
