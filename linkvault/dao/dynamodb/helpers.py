import functools

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from linkvault.dao.exceptions import DataStoreError, TransientDataStoreError


__all__ = []

# DynamoDB error codes worth retrying with backoff
TRANSIENT_ERROR_CODES = frozenset(
    {
        'ProvisionedThroughputExceededException',
        'ThrottlingException',
        'RequestLimitExceeded',
        'InternalServerError',
        'ServiceUnavailable',
    }
)

# botocore network failures (timeouts, dropped or refused connections)
TRANSIENT_BOTOCORE_ERRORS = (
    ConnectTimeoutError,
    ReadTimeoutError,
    EndpointConnectionError,
    ConnectionClosedError,
)


def client_error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', '')


def handle_dynamodb_errors[F](method: F) -> F:
    """Wrap DynamoDB-interacting DAO methods to translate botocore errors

    Throttling, server-side and network errors become TransientDataStoreError.
    Everything else botocore raises becomes DataStoreError.

    NOTE: errors the method handles itself (e.g. ConditionalCheckFailedException)
          never reach this decorator.

    Args:
        method (Callable[..., Any]):
            DAO method performing DynamoDB operations.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises TransientDataStoreError or DataStoreError instead.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = client_error_code(e)
            if code in TRANSIENT_ERROR_CODES:
                raise TransientDataStoreError(f'DynamoDB table {self.table_name!r} is unavailable ({code}).') from e
            raise DataStoreError(f'DynamoDB table {self.table_name!r} request failed ({code or "unknown error"}).') from e
        except TRANSIENT_BOTOCORE_ERRORS as e:
            raise TransientDataStoreError(f"Can't reach DynamoDB table {self.table_name!r}: {e}") from e
        except BotoCoreError as e:
            raise DataStoreError(f'DynamoDB table {self.table_name!r} request failed: {e}') from e

    return wrapper
