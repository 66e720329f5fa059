__all__ = ['RedisKeySchema']


class RedisKeySchema:
    """Build namespaced Redis keys for URL mappings

    Keys are colon-joined segments, led by an optional prefix. Set one prefix
    per app and environment (e.g. "linkvault:prod") so several deployments
    can share a Redis.

    Example:
        >>> RedisKeySchema(prefix='linkvault:prod').link_key('abc123')
        'linkvault:prod:links:abc123'
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')
        self.prefix = prefix

    def _key(self, *segments: str) -> str:
        if self.prefix is None:
            return ':'.join(segments)
        return ':'.join((self.prefix, *segments))

    def link_key(self, shortcode: str) -> str:
        return self._key('links', shortcode)
