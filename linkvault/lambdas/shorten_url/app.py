import base64
import binascii
import json
import logging

from linkvault.types import LambdaEvent, LambdaContext, LambdaResponse
from linkvault.constants import DEPENDENCY_UNAVAILABLE
from linkvault.dao.exceptions import DataStoreError
from linkvault.exceptions import CapacityError, ConfigurationError, DependencyError
from linkvault.lambdas.bootstrap import mapping_service
from linkvault.lambdas.responses import response_201, response_400, response_500, response_503
from linkvault.utils.helpers import guarantee_500_response, is_valid_target_url
from linkvault.utils.runtime import invocation_deadline
from linkvault.lambdas.shorten_url.constants import (
    LAMBDA_NAME,
    INVALID_JSON,
    MISSING_TARGET_URL,
    INVALID_TARGET_URL,
    SHORTCODE_SPACE_EXHAUSTED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def _request_body(event: LambdaEvent) -> dict:
    """Decode the JSON object in an API Gateway request body

    Raises:
        ValueError: If the body isn't a JSON object.
    """
    raw = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        try:
            raw = base64.b64decode(raw, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError('Request body is not valid base64 encoded UTF-8.') from e

    body = json.loads(raw)  # json.JSONDecodeError is a ValueError
    if not isinstance(body, dict):
        raise ValueError('Request body must be a JSON object.')
    return body


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Get the process-wide mapping service
    - Step 2: Extract target URL from request body
    - Step 3: Validate target URL
    - Step 4: Create the shortcode -> target URL mapping
    - Step 5: Respond to client with 201

    HTTP responses:
        201: Successful URL shortening
            message: success message
            targetUrl: original url (provided in request)
            shortcode: newly generated shortcode
        400: Bad client request
            errorCode: INVALID_JSON, MISSING_TARGET_URL or INVALID_TARGET_URL
        500: Internal server error
            errorCode: SHORTCODE_SPACE_EXHAUSTED or UNKNOWN_INTERNAL_SERVER_ERROR
        503: Durable store unavailable
            errorCode: DEPENDENCY_UNAVAILABLE

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, context)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['shortcode']
        'Gh71WPT'
    """
    # 1- Get the mapping service (built once per process)
    try:
        service = mapping_service(LAMBDA_NAME)
    except ConfigurationError:
        logger.exception('Failed to configure shorten URL function. Responding with 500.')
        return response_500()
    except DataStoreError:
        logger.exception('Durable store unreachable at startup. Responding with 503.', extra={'event': DEPENDENCY_UNAVAILABLE})
        return response_503(message='durable store unavailable')

    # 2- Extract target URL from request body
    try:
        request_body = _request_body(event)
    except ValueError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    target_url = request_body.get('target_url') or request_body.get('targetUrl')
    if not target_url:
        logger.info("Missing 'target_url' in JSON body. Responding with 400.", extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 3- Validate target URL
    if not is_valid_target_url(target_url):
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_TARGET_URL})
        return response_400(message="'target_url' must be an absolute http(s) URL", error_code=INVALID_TARGET_URL)

    # 4- Create mapping
    try:
        shortcode = service.create(target_url, deadline=invocation_deadline(context))
    except CapacityError:
        logger.error('No free shortcode found. Responding with 500.', extra={'event': SHORTCODE_SPACE_EXHAUSTED})
        return response_500(message='could not allocate a shortcode', error_code=SHORTCODE_SPACE_EXHAUSTED)
    except DependencyError:
        logger.error('Durable store unavailable. Responding with 503.', extra={'event': DEPENDENCY_UNAVAILABLE})
        return response_503(message='durable store unavailable')

    # 5- Return successful response to client
    logger.info('Shortened target URL. Responding with 201.', extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS})
    return response_201(
        {
            'message': f'Successfully shortened {target_url}',
            'targetUrl': target_url,
            'shortcode': shortcode,
        }
    )
