import json
import base64
import binascii
import logging
import urllib.parse
from datetime import datetime, UTC

from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.dao.redis import ShortURLRedisDAO
from linkshortener.dao.exceptions import CounterUnavailableError, DataStoreError, ShortURLAlreadyExistsError
from linkshortener.utils import load_config, dao_kwargs, get_short_url
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.responses import response_200, response_400, response_500
from linkshortener.lambdas.shorten_url.constants import (
    INVALID_JSON,
    MISSING_URL,
    INVALID_URL,
    COUNTER_UNAVAILABLE,
    SHORTCODE_COLLISION,
    DATA_STORE_ERROR,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def _request_body(event: LambdaEvent) -> str:
    body = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body, validate=True).decode('utf-8')
    return body


def _is_web_url(url: str) -> bool:
    components = urllib.parse.urlparse(url)
    return components.scheme in {'http', 'https'} and bool(components.netloc)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract original URL from request body
    - Step 2: Allocate a shortcode and store the mapping (via DAO)
    - Step 3: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            url: newly generated short url
            shortcode: newly generated shortcode
            target_url: original url (provided in request)
            created_at: creation time in epoch milliseconds
        400: Bad client request
            message: indicate cause of bad request (invalid JSON, missing or invalid url)
        500: Internal server error
            message: indicate the server couldn't allocate a short URL

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortcode']
        'Q0v'
    """
    # 0- Get application's config
    app_config = load_config('shorten_url')

    # 1- Extract original URL from request body
    try:
        request_body = json.loads(_request_body(event))
    except (json.JSONDecodeError, UnicodeDecodeError, binascii.Error):
        logger.info('Request body is not valid JSON. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    target_url = request_body.get('url') if isinstance(request_body, dict) else None
    if not isinstance(target_url, str) or not target_url.strip():
        logger.info('Missing "url" in request body. Responding with 400.', extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)
    if not _is_web_url(target_url):
        logger.info('Target is not an http(s) URL. Responding with 400.', extra={'event': INVALID_URL})
        return response_400(message=f"'{target_url}' is not a valid http(s) URL", error_code=INVALID_URL)

    # 2- Allocate a shortcode and store the mapping (via DAO)
    try:
        short_url_dao = ShortURLRedisDAO(**dao_kwargs(app_config))
        shortcode = short_url_dao.allocate(target=target_url)
    except CounterUnavailableError:
        logger.exception('Global counter unavailable. Responding with 500.', extra={'event': COUNTER_UNAVAILABLE})
        return response_500(message='could not allocate a short URL', error_code=COUNTER_UNAVAILABLE)
    except ShortURLAlreadyExistsError as e:
        logger.error(
            'Allocated shortcode is already taken, the global counter may have been reset. Responding with 500.',
            extra={'shortcode': e.shortcode, 'event': SHORTCODE_COLLISION},
        )
        return response_500(message='could not allocate a short URL', error_code=SHORTCODE_COLLISION)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': DATA_STORE_ERROR})
        return response_500(message='data store unavailable', error_code=DATA_STORE_ERROR)

    # 3- Return successful response to user
    short_url = get_short_url(shortcode, event)
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortcode': shortcode, 'event': SHORTEN_SUCCESS},
    )
    return response_200(
        {
            'message': f'Successfully shortened {target_url} to {short_url}',
            'url': short_url,
            'shortcode': shortcode,
            'target_url': target_url,
            'created_at': int(datetime.now(UTC).timestamp() * 1000),
        }
    )
