"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when the durable store fails in a way retrying won't fix
        (e.g. missing table, access denied, malformed item).

    TransientDataStoreError:
        Raised when the durable store fails in a way that may succeed on retry
        (e.g. timeouts, dropped connections, throttling).

    CacheError:
        Raised when any cache operation fails.

Example:
    >>> from linkvault.dao.exceptions import CacheError
    >>> raise CacheError("Can't reach cache at cache.internal:6379/0.")
    Traceback (most recent call last):
        ...
    linkvault.dao.exceptions.CacheError: Can't reach cache at cache.internal:6379/0.
"""

from linkvault.exceptions import LinkVaultError


class DAOError(LinkVaultError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Raised when the durable data store encounters an error."""

    error_code = 'dao:data_store_error'


class TransientDataStoreError(DataStoreError):
    """Raised when the durable data store encounters a retryable error.

    Examples include connection issues, timeouts, and throttling.
    """

    error_code = 'dao:transient_data_store_error'


class CacheError(DAOError):
    """Raised when reading from or writing to the cache fails."""

    error_code = 'dao:cache_error'
