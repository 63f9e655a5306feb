"""HTTP response builders shared by the request handlers.

Every handler answers with a plain dictionary in the same proxy format:

    {
        "statusCode": 302,
        "headers": {"Location": "https://example.com/"},
        "body": "{}"
    }

The Flask server (see flatshortener.server) turns these dictionaries into
real HTTP responses, so handlers stay testable without a web framework.
"""

import json


JSON_HEADERS = {'Content-Type': 'application/json'}


def _error(status: int, base: str, message: str | None, error_code: str | None) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': status,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_html(html: str) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'text/html; charset=utf-8'},
        'body': html,
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    return _error(404, 'Not Found', message, error_code)


def response_409(message: str | None = None, error_code: str | None = None) -> dict:
    return _error(409, 'Conflict', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> dict:
    return _error(500, 'Internal Server Error', message, error_code)
