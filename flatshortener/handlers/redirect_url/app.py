import logging

from flatshortener.dao.exceptions import ShortURLNotFoundError, DataStoreError
from flatshortener.handlers.context import HandlerContext
from flatshortener.types import HandlerEvent, HandlerResponse
from flatshortener.utils.helpers import get_short_url, guarantee_500_response
from flatshortener.utils.responses import response_302, response_400, response_404
from flatshortener.handlers.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    VISIT_NOT_PERSISTED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming requests to redirect URLs

    This handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Count the visit (best effort persistence)
    - Step 3: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: unknown shortcode

    Args:
        event (HandlerEvent):
            Request event containing the shortcode path parameter.
        context (HandlerContext):
            Application resources (DAO, public base URL).

    Returns:
        HandlerResponse:
            Response dictionary including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': '1'}}
        >>> response = handler(event, context)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/a'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event, context.public_base_url))

    # 2- Count the visit; a failed write must not block the redirect
    try:
        short_url = context.dao.hit(shortcode=shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in store. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        short_url_string = get_short_url(shortcode, event, context.public_base_url)
        return response_404(message=f"short url {short_url_string} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.warning(
            'Failed to persist visit count. Redirecting anyway.',
            exc_info=True,
            extra={'shortcode': shortcode, 'event': VISIT_NOT_PERSISTED},
        )
        short_url = context.dao.get(shortcode=shortcode)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=short_url.target)
