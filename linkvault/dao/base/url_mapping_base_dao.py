"""Abstract base class for durable UrlMapping data access objects (DAOs).

This class establishes a consistent contract for all durable store
implementations, regardless of the underlying storage mechanism (e.g.
DynamoDB, Redis). The durable store is the authoritative source of truth
and the single point where shortcode uniqueness is enforced.

Responsibilities:
    - Atomically insert a mapping only if its shortcode is still free.
    - Retrieve mappings by shortcode.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkvault.models import UrlMapping
        >>> from linkvault.dao.dynamodb import UrlMappingDynamoDBDAO

        >>> dao = UrlMappingDynamoDBDAO(table_name='linkvault-links')
        >>> dao.put_if_absent(UrlMapping(shortcode='a1b2c3', target='https://example.com'))
        <PutResult.CREATED: 'created'>
        >>> dao.put_if_absent(UrlMapping(shortcode='a1b2c3', target='https://example.org'))
        <PutResult.ALREADY_EXISTS: 'already_exists'>

        >>> dao.get('a1b2c3').target
        'https://example.com'
        >>> dao.get('zzzzzz') is None
        True
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from linkvault.models import UrlMapping


class PutResult(StrEnum):
    """Outcome of a conditional insert."""

    CREATED = 'created'
    ALREADY_EXISTS = 'already_exists'


class UrlMappingBaseDAO(ABC):
    """Interface for durable UrlMapping data access objects (DAOs).

    Methods:
        put_if_absent(mapping: UrlMapping, **kwargs) -> PutResult:
            Insert a mapping only if no mapping exists for its shortcode.
            Raises TransientDataStoreError on retryable failures.
            Raises DataStoreError on any other failure.

        get(shortcode: str, **kwargs) -> UrlMapping | None:
            Retrieve a mapping by shortcode, None if absent.
            Raises TransientDataStoreError on retryable failures.
            Raises DataStoreError on any other failure.

    NOTE:
        - Mappings are never mutated or deleted through this interface.
    """

    @abstractmethod
    def put_if_absent(self, mapping: UrlMapping, **kwargs) -> PutResult:
        """Insert a mapping unless its shortcode is already bound.

        Implementations must perform the existence check and the write as a
        single atomic operation in the backing store.

        Args:
            mapping (UrlMapping):
                The mapping to insert.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            PutResult:
                CREATED if the mapping was written,
                ALREADY_EXISTS if the shortcode was already bound (nothing written).

        Raises:
            TransientDataStoreError:
                On timeouts, connection issues or throttling.

            DataStoreError:
                On any other data store error.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> UrlMapping | None:
        """Retrieve a mapping by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the mapping to retrieve.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlMapping | None: The mapping if found, otherwise None.

        Raises:
            TransientDataStoreError:
                On timeouts, connection issues or throttling.

            DataStoreError:
                On any other data store error.
        """
        pass
