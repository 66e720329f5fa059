from linkvault.dao.dynamodb.url_mapping_dynamodb_dao import UrlMappingDynamoDBDAO


__all__ = [
    'UrlMappingDynamoDBDAO',
]
