"""HTTP entrypoint for the URL shortener

Routes:
    GET  /                      HTML form (handlers.index)
    POST /api/shorten           create a short URL (handlers.shorten_url)
    GET  /api/stats/<shortcode> stored record of a short URL (handlers.url_stats)
    GET  /<shortcode>           redirect to the target URL (handlers.redirect_url)

Each Flask view only translates between the HTTP request/response and the
handler's event/response dictionaries. The store (DAO) is created once per
application and shared by all handlers through a HandlerContext.

Example:
    $ PORT=8080 DB_FILE=/tmp/urls.json python -m flatshortener
"""

import logging
from collections.abc import Callable

from flask import Flask, Response, request

from flatshortener.dao.base import ShortURLBaseDAO
from flatshortener.dao.json import ShortURLJsonDAO
from flatshortener.dao.exceptions import DataStoreError
from flatshortener.exceptions import ConfigurationError
from flatshortener.handlers import HandlerContext
from flatshortener.handlers.index import app as index
from flatshortener.handlers.shorten_url import app as shorten_url
from flatshortener.handlers.redirect_url import app as redirect_url
from flatshortener.handlers.url_stats import app as url_stats
from flatshortener.types import AppConfig, HandlerEvent, HandlerResponse
from flatshortener.utils.config import load_config
from flatshortener.utils.logging import initialize_logging


logger = logging.getLogger(__name__)

EXTENSION_KEY = 'flatshortener'


def build_event(path_parameters: dict[str, str] | None = None) -> HandlerEvent:
    """Describe the current Flask request as a handler event."""
    return {
        'httpMethod': request.method,
        'path': request.path,
        'pathParameters': path_parameters or {},
        'headers': {key.lower(): value for key, value in request.headers.items()},
        'body': request.get_data(as_text=True),
        'requestContext': {
            'domainName': request.host,
            'protocol': request.scheme,
        },
    }


def to_flask_response(response: HandlerResponse) -> Response:
    return Response(
        response.get('body', ''),
        status=response['statusCode'],
        headers=response.get('headers', {}),
    )


def create_app(config: AppConfig | None = None, dao: ShortURLBaseDAO | None = None) -> Flask:
    """Build the Flask application

    Args:
        config (AppConfig | None):
            Configuration as returned by load_config(). Loaded when None.
        dao (ShortURLBaseDAO | None):
            Store to serve from. A ShortURLJsonDAO on config['db_file'] is
            created (and loaded) when None.

    Raises:
        DataStoreError:
            If the store can't be loaded (strict mode) or created.
    """
    if config is None:
        config = load_config()
    if dao is None:
        dao = ShortURLJsonDAO(path=config['db_file'], strict=config['strict_load'])

    app = Flask(__name__)
    context = HandlerContext(dao=dao, public_base_url=config['public_base_url'])
    app.extensions[EXTENSION_KEY] = context

    def dispatch(handler: Callable[..., HandlerResponse], **path_parameters: str) -> Response:
        return to_flask_response(handler(build_event(path_parameters), context))

    @app.get('/')
    def index_form() -> Response:
        return dispatch(index.handler)

    @app.post('/api/shorten')
    def create_short_url() -> Response:
        return dispatch(shorten_url.handler)

    @app.get('/api/stats/<shortcode>')
    def get_stats(shortcode: str) -> Response:
        return dispatch(url_stats.handler, shortcode=shortcode)

    @app.get('/<shortcode>')
    def redirect_to_url(shortcode: str) -> Response:
        return dispatch(redirect_url.handler, shortcode=shortcode)

    return app


def main() -> None:
    """Load configuration, open the store and serve HTTP until interrupted."""
    try:
        config = load_config()
    except ConfigurationError:
        initialize_logging()
        logger.critical('Invalid configuration. Refusing to start.', exc_info=True)
        raise SystemExit(1)

    initialize_logging(config['log_level'])

    try:
        app = create_app(config)
    except DataStoreError:
        logger.critical('Failed to load store. Refusing to start.', exc_info=True, extra={'path': str(config['db_file'])})
        raise SystemExit(1)

    logger.info(f'URL shortener listening on http://localhost:{config["port"]}', extra={'port': config['port']})
    app.run(host='0.0.0.0', port=config['port'])  # noqa: S104
