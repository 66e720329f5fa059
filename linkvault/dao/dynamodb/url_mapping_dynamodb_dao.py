"""Durable store implementation for URL mappings in DynamoDB

This is the default system of record. Each mapping is one item keyed by its
shortcode (partition key `shortcode`, type S):

    {"shortcode": "Gh71WPT", "target": "https://example.com", "created_at": "2026-10-18T12:00:00+00:00"}

Uniqueness is enforced by DynamoDB's conditional write
(`attribute_not_exists(shortcode)`), reads are strongly consistent so a
mapping is visible to resolve as soon as create returns.

Classes:
    UrlMappingDynamoDBDAO:
        DAO for storing and retrieving UrlMapping in a DynamoDB table.

Example:
    >>> dao = UrlMappingDynamoDBDAO(table_name='linkvault-links', region_name='eu-central-1')
    >>> dao.put_if_absent(UrlMapping(shortcode='abc123', target='https://example.com'))
    <PutResult.CREATED: 'created'>
    >>> dao.get('abc123').target
    'https://example.com'
"""

import os
from typing import Any, Optional

import boto3
from beartype import beartype
from botocore.config import Config
from botocore.exceptions import ClientError

from linkvault.constants import Defaults, ENV
from linkvault.models import UrlMapping
from linkvault.dao.base import UrlMappingBaseDAO, PutResult
from linkvault.dao.dynamodb.helpers import handle_dynamodb_errors, client_error_code
from linkvault.dao.exceptions import DataStoreError
from linkvault.utils.runtime import running_locally


class UrlMappingDynamoDBDAO(UrlMappingBaseDAO):
    """DynamoDB-based durable store for URL mappings

    Attributes:
        table_name (str):
            Name of the DynamoDB table.
        table (Any):
            boto3 DynamoDB Table resource used for all requests.

    Methods:
        put_if_absent(mapping: UrlMapping, **kwargs) -> PutResult:
            Conditionally put a mapping. Never overwrites an existing shortcode.

        get(shortcode: str, **kwargs) -> UrlMapping | None:
            Strongly consistent read of a mapping by shortcode, None if absent.
    """

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        connect_timeout: float = Defaults.STORE_CONNECT_TIMEOUT,
        read_timeout: float = Defaults.STORE_READ_TIMEOUT,
        table: Optional[Any] = None,
    ):
        """Initialize a DynamoDB-based DAO

        Args:
            table_name (str):
                Name of the DynamoDB table holding the mappings.

            region_name (Optional[str]):
                AWS region. Defaults to the Lambda's region.

            endpoint_url (Optional[str]):
                Custom endpoint. Defaults to LocalStack when running locally.

            connect_timeout (float):
                Seconds to wait for a connection to DynamoDB.

            read_timeout (float):
                Seconds to wait for a DynamoDB response.

            table (Optional[Any]):
                Pre-initialized boto3 Table resource (useful in tests).
                If None, a new one is created.
        """
        if table is None:
            if endpoint_url is None and running_locally():
                endpoint_url = os.environ.get(ENV.LocalStack.ENDPOINT, 'http://localhost:4566')

            # NOTE: botocore retries are disabled, UrlMappingService owns the retry policy
            config = Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={'max_attempts': 1, 'mode': 'standard'},
            )
            dynamodb = boto3.resource('dynamodb', region_name=region_name, endpoint_url=endpoint_url, config=config)
            table = dynamodb.Table(table_name)

        self.table_name = table_name
        self.table = table

    @handle_dynamodb_errors
    @beartype
    def put_if_absent(self, mapping: UrlMapping, **kwargs) -> PutResult:
        """Conditionally insert a mapping into DynamoDB

        Args:
            mapping (UrlMapping):
                The mapping to insert.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            PutResult: CREATED or ALREADY_EXISTS.

        Raises:
            TransientDataStoreError:
                On throttling, DynamoDB server errors or network timeouts.
            DataStoreError:
                On any other DynamoDB error.
        """
        try:
            self.table.put_item(
                Item=mapping.to_item(),
                ConditionExpression='attribute_not_exists(shortcode)',
            )
        except ClientError as e:
            if client_error_code(e) == 'ConditionalCheckFailedException':
                return PutResult.ALREADY_EXISTS
            raise
        return PutResult.CREATED

    @handle_dynamodb_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> UrlMapping | None:
        """Retrieve a mapping by shortcode with a strongly consistent read

        Args:
            shortcode (str):
                The shortcode identifier of the mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlMapping | None: The mapping if found, otherwise None.

        Raises:
            TransientDataStoreError:
                On throttling, DynamoDB server errors or network timeouts.
            DataStoreError:
                On any other DynamoDB error, or if the stored item is malformed.
        """
        response = self.table.get_item(Key={'shortcode': shortcode}, ConsistentRead=True)
        item = response.get('Item')
        if item is None:
            return None

        try:
            return UrlMapping.from_item(item)
        except (KeyError, TypeError, ValueError) as e:
            raise DataStoreError(f"Malformed mapping item for shortcode '{shortcode}' in table {self.table_name!r}.") from e
