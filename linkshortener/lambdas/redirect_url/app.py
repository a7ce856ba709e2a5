import logging

from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.dao.redis import ShortURLRedisDAO
from linkshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError
from linkshortener.utils import load_config, dao_kwargs, get_short_url
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.responses import response_302, response_400, response_404, response_500
from linkshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_ERROR,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode to its target URL (via DAO)
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: the short URL doesn't exist
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Q0v'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    app_config = load_config('redirect_url')

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the shortcode to its target URL (via DAO)
    try:
        short_url_dao = ShortURLRedisDAO(**dao_kwargs(app_config))
        target_url = short_url_dao.resolve(shortcode=shortcode)
    except ShortURLNotFoundError:
        # NOTE: a link allocated a moment ago may not be visible yet
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_ERROR})
        return response_500(message='data store unavailable', error_code=DATA_STORE_ERROR)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
