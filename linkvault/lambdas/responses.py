"""API Gateway (Lambda proxy) responses shared by all lambda handlers

Every response carries a JSON body and the CORS headers the frontend needs.
Error bodies have the shape {"message": ..., "errorCode": ...}.
"""

import json
from typing import Any

from linkvault.types import LambdaResponse
from linkvault.constants import DEPENDENCY_UNAVAILABLE
from linkvault.utils.helpers import CORS_HEADERS


def _response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error_body(base: str, message: str | None, error_code: str | None) -> dict[str, Any]:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return _response(201, body)


def response_302(*, location: str) -> LambdaResponse:
    return _response(302, {}, headers={'Location': location})  # no body needed for redirects


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(400, _error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(404, _error_body('Not Found', message, error_code))


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _response(500, _error_body('Internal Server Error', message, error_code))


def response_503(message: str | None = None, error_code: str | None = DEPENDENCY_UNAVAILABLE) -> LambdaResponse:
    return _response(503, _error_body('Service Unavailable', message, error_code))
