"""API Gateway (Lambda Proxy) response builders shared by all handlers"""

import json
from typing import Any

from linkshortener.types import LambdaResponse


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def _error_body(base: str, message: str | None, error_code: str | None) -> str:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json.dumps(body)


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 400,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': _error_body('Bad Request', message, error_code),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 404,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': _error_body('Not Found', message, error_code),
    }


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return {
        'statusCode': 500,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': _error_body('Internal Server Error', message, error_code),
    }


def response_text(text: str) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'text/plain; charset=utf-8', **CORS_HEADERS},
        'body': text,
    }
