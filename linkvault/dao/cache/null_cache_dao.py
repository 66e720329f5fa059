from linkvault.dao.base import UrlCacheBaseDAO


class NullUrlCacheDAO(UrlCacheBaseDAO):
    """Cache that never holds anything.

    Used when caching is disabled so the mapping service can keep a single
    cache-aside code path. Every read misses and every write is dropped.
    """

    def get(self, shortcode: str) -> str | None:
        return None

    def set(self, shortcode: str, target: str, ttl: int) -> None:
        return None
