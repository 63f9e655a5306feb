import json
from datetime import datetime, UTC
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from flatshortener.constants import ENV
from flatshortener.types import HandlerEvent
from flatshortener.handlers.context import HandlerContext
from flatshortener.handlers.shorten_url import app
from flatshortener.models import ShortURLModel
from flatshortener.dao.base import ShortURLBaseDAO
from flatshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError


def make_event(body: dict | str, content_type: str = 'application/json') -> HandlerEvent:
    return cast(HandlerEvent, {
        'httpMethod': 'POST',
        'path': '/api/shorten',
        'headers': {'content-type': content_type},
        'body': body if isinstance(body, str) else json.dumps(body),
        'requestContext': {'domainName': 'testhost:1000', 'protocol': 'http'},
    })


class TestShortenUrlHandler:

    @pytest.fixture
    def short_url_dao(self) -> ShortURLBaseDAO:
        dao = MagicMock(spec=ShortURLBaseDAO)
        dao.shorten.side_effect = lambda target, alias=None: ShortURLModel(
            target=target,
            shortcode=alias or '1',
            created_at=datetime(2025, 10, 15, tzinfo=UTC),
        )
        return dao

    @pytest.fixture(autouse=True)
    def setup(self, short_url_dao: ShortURLBaseDAO) -> None:
        self.short_url_dao = short_url_dao
        self.context = HandlerContext(dao=short_url_dao)

    def test_handler(self) -> None:
        response = app.handler(make_event({'url': 'https://example.com/a'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert response['headers']['Content-Type'] == 'application/json'
        assert body == {
            'message': 'Successfully shortened https://example.com/a to http://testhost:1000/1',
            'shortUrl': 'http://testhost:1000/1',
            'code': '1',
            'url': 'https://example.com/a',
        }
        self.short_url_dao.shorten.assert_called_once_with('https://example.com/a', alias=None)

    def test_handler_normalizes_url(self) -> None:
        response = app.handler(make_event({'url': 'HTTPS://Example.COM:443'}), self.context)

        assert json.loads(response['body'])['url'] == 'https://example.com/'
        self.short_url_dao.shorten.assert_called_once_with('https://example.com/', alias=None)

    def test_handler_with_custom_alias(self) -> None:
        response = app.handler(make_event({'url': 'https://example.com/a', 'customAlias': 'my-link'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body['code'] == 'my-link'
        assert body['shortUrl'] == 'http://testhost:1000/my-link'
        self.short_url_dao.shorten.assert_called_once_with('https://example.com/a', alias='my-link')

    def test_handler_with_empty_custom_alias(self) -> None:
        response = app.handler(make_event({'url': 'https://example.com/a', 'customAlias': ''}), self.context)

        assert response['statusCode'] == 200
        self.short_url_dao.shorten.assert_called_once_with('https://example.com/a', alias=None)

    def test_handler_with_public_base_url(self) -> None:
        context = HandlerContext(dao=self.short_url_dao, public_base_url='https://go.example.com/')

        response = app.handler(make_event({'url': 'https://example.com/a'}), context)

        assert json.loads(response['body'])['shortUrl'] == 'https://go.example.com/1'

    def test_handler_with_form_body(self) -> None:
        event = make_event('url=https%3A%2F%2Fexample.com%2Fa&customAlias=docs', 'application/x-www-form-urlencoded')

        response = app.handler(event, self.context)

        assert response['statusCode'] == 200
        self.short_url_dao.shorten.assert_called_once_with('https://example.com/a', alias='docs')

    @pytest.mark.parametrize('body', ['{not json', '[1, 2]', '"https://example.com"', pytest.param('[' * 100000, id='deeply-nested')])
    def test_handler_with_invalid_body(self, body: str) -> None:
        response = app.handler(make_event(body), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_JSON_BODY'
        self.short_url_dao.shorten.assert_not_called()

    @pytest.mark.parametrize('payload', [{}, {'url': ''}, {'customAlias': 'x'}])
    def test_handler_with_missing_url(self, payload: dict) -> None:
        response = app.handler(make_event(payload), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body == {'message': "Bad Request (missing 'url' in request body)", 'errorCode': 'MISSING_URL'}
        self.short_url_dao.shorten.assert_not_called()

    @pytest.mark.parametrize('url', ['not a url', 'example.com/a', 'https://', 42, 'http://example.com:99999/'])
    def test_handler_with_invalid_url(self, url) -> None:
        response = app.handler(make_event({'url': url}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_URL'
        self.short_url_dao.shorten.assert_not_called()

    @pytest.mark.parametrize('alias', ['my link', '@', 'a/b', 'ünï', 7])
    def test_handler_with_invalid_alias(self, alias) -> None:
        response = app.handler(make_event({'url': 'https://example.com/a', 'customAlias': alias}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_ALIAS'
        self.short_url_dao.shorten.assert_not_called()

    def test_handler_with_taken_alias(self) -> None:
        self.short_url_dao.shorten.side_effect = ShortURLAlreadyExistsError("Short URL with code 'x' already exists.")

        response = app.handler(make_event({'url': 'https://example.com/a', 'customAlias': 'x'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 409
        assert body == {'message': 'Conflict (custom alias already in use)', 'errorCode': 'ALIAS_TAKEN'}

    def test_handler_with_store_failure(self) -> None:
        self.short_url_dao.shorten.side_effect = DataStoreError("Can't access store file at urls.json.")

        response = app.handler(make_event({'url': 'https://example.com/a'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'STORE_WRITE_FAILED'}

    def test_handler_with_unexpected_error(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.App.APP_ENV, 'prod')
        self.short_url_dao.shorten.side_effect = RuntimeError('Something goes wrong')

        response = app.handler(make_event({'url': 'https://example.com/a'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'UNKNOWN_INTERNAL_SERVER_ERROR'}

    def test_handler_with_unexpected_error_locally(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.App.APP_ENV, 'local')
        self.short_url_dao.shorten.side_effect = RuntimeError('Something goes wrong')

        with pytest.raises(RuntimeError, match='Something goes wrong'):
            app.handler(make_event({'url': 'https://example.com/a'}), self.context)
