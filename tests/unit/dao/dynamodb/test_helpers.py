"""Unit tests for handle_dynamodb_errors and client_error_code."""

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, ParamValidationError

from linkvault.dao.dynamodb.helpers import client_error_code, handle_dynamodb_errors
from linkvault.dao.exceptions import DataStoreError, TransientDataStoreError


class DummyDAO:
    table_name = 'test-table'

    def __init__(self, error: Exception | None = None):
        self.error = error

    @handle_dynamodb_errors
    def call(self):
        """Call DynamoDB."""
        if self.error:
            raise self.error
        return 'OK'


def test_client_error_code():
    error = ClientError({'Error': {'Code': 'ThrottlingException'}}, 'GetItem')
    assert client_error_code(error) == 'ThrottlingException'
    assert client_error_code(ClientError({}, 'GetItem')) == ''


def test_normal_execution():
    assert DummyDAO().call() == 'OK'
    assert DummyDAO.call.__name__ == 'call'
    assert DummyDAO.call.__doc__ == 'Call DynamoDB.'


def test_endpoint_connection_error_is_transient():
    error = EndpointConnectionError(endpoint_url='https://dynamodb.eu-central-1.amazonaws.com')

    with pytest.raises(TransientDataStoreError) as exc_info:
        DummyDAO(error).call()
    assert exc_info.value.__cause__ is error


def test_param_validation_error_is_persistent():
    with pytest.raises(DataStoreError) as exc_info:
        DummyDAO(ParamValidationError(report='Invalid type for parameter Key')).call()
    assert not isinstance(exc_info.value, TransientDataStoreError)


def test_client_error_without_code():
    with pytest.raises(DataStoreError, match='unknown error'):
        DummyDAO(ClientError({}, 'PutItem')).call()
