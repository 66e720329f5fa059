import logging

from linkvault.types import LambdaEvent, LambdaContext, LambdaResponse
from linkvault.constants import DEPENDENCY_UNAVAILABLE
from linkvault.dao.exceptions import DataStoreError
from linkvault.exceptions import ConfigurationError, DependencyError, NotFoundError
from linkvault.lambdas.bootstrap import mapping_service
from linkvault.lambdas.responses import response_302, response_400, response_404, response_500, response_503
from linkvault.utils.helpers import get_short_url, guarantee_500_response
from linkvault.utils.runtime import invocation_deadline
from linkvault.lambdas.redirect_url.constants import (
    LAMBDA_NAME,
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Get the process-wide mapping service
    - Step 2: Extract shortcode from request path
    - Step 3: Resolve shortcode to its target URL
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            errorCode: MISSING_SHORTCODE
        404: Unknown shortcode
            errorCode: SHORT_URL_NOT_FOUND
        500: Internal server error
        503: Durable store unavailable
            errorCode: DEPENDENCY_UNAVAILABLE

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71WPT'}}
        >>> response = lambda_handler(event, context)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Get the mapping service (built once per process)
    try:
        service = mapping_service(LAMBDA_NAME)
    except ConfigurationError:
        logger.exception('Failed to configure redirect URL function. Responding with 500.')
        return response_500()
    except DataStoreError:
        logger.exception('Durable store unreachable at startup. Responding with 503.', extra={'event': DEPENDENCY_UNAVAILABLE})
        return response_503(message='durable store unavailable')

    # 2- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 3- Resolve shortcode
    try:
        target_url = service.resolve(shortcode, deadline=invocation_deadline(context))
    except NotFoundError:
        logger.info(
            'Short URL record not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DependencyError:
        logger.error(
            'Durable store unavailable. Responding with 503.',
            extra={'shortcode': shortcode, 'event': DEPENDENCY_UNAVAILABLE},
        )
        return response_503(message='durable store unavailable')

    # 4- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
