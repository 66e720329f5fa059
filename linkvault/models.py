from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class UrlMapping:
    """Represent a shortcode to target URL mapping.

    A mapping is created exactly once and never mutated afterwards.

    Attributes:
        shortcode (str):
            The unique short identifier representing the target URL.
        target (str):
            The original long URL that the shortcode resolves to.
        created_at (datetime):
            Creation timestamp in UTC. Informational only.

    Example:
        >>> mapping = UrlMapping(shortcode='Gh71WPT', target='https://example.com/article/123')
        >>> mapping.to_item()['target']
        'https://example.com/article/123'
        >>> UrlMapping.from_item(mapping.to_item()) == mapping
        True
    """

    shortcode: str
    target: str
    created_at: datetime = field(default_factory=_utcnow)

    def to_item(self) -> dict[str, str]:
        """Serialize into the flat item stored by durable backends."""
        return {
            'shortcode': self.shortcode,
            'target': self.target,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> 'UrlMapping':
        """Deserialize an item written by `to_item()`.

        Raises:
            KeyError: If 'shortcode' or 'target' is missing.
            ValueError: If 'created_at' is not an ISO-8601 timestamp.
        """
        created_at = item.get('created_at')
        return cls(
            shortcode=item['shortcode'],
            target=item['target'],
            created_at=datetime.fromisoformat(created_at) if created_at else _utcnow(),
        )
