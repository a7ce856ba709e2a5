from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import base_url
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.responses import response_text


SHORTEN_PATH = '/api/v1/shorten'


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Describe how to use the API (GET /)"""
    return response_text(
        'URL Shortener API is running. '
        f'The API is available at the URI {base_url(event).rstrip("/")}{SHORTEN_PATH}. '
        'Use the below payload to shorten a URL:\n'
        '{\n'
        ' "url": "https://example.com/your-long-url"\n'
        '}\n'
    )
