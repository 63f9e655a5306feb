import logging

from flatshortener.dao.exceptions import ShortURLNotFoundError
from flatshortener.handlers.context import HandlerContext
from flatshortener.types import HandlerEvent, HandlerResponse
from flatshortener.utils.helpers import guarantee_500_response, isoformat_utc
from flatshortener.utils.responses import response_200, response_400, response_404
from flatshortener.handlers.url_stats.constants import MISSING_SHORTCODE, SHORT_URL_NOT_FOUND


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Return the stored record of a short URL

    HTTP responses:
        200: {"code", "url", "createdAt", "visits", "lastVisited"?}
        400: missing shortcode in path parameters
        404: unknown shortcode
    """
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        short_url = context.dao.get(shortcode=shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in store. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short code '{shortcode}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    body = {
        'code': short_url.shortcode,
        'url': short_url.target,
        'createdAt': isoformat_utc(short_url.created_at),
        'visits': short_url.visits,
    }
    if short_url.last_visited is not None:
        body['lastVisited'] = isoformat_utc(short_url.last_visited)
    return response_200(body)
