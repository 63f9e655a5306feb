import logging

from flatshortener.dao.exceptions import ShortURLAlreadyExistsError, DataStoreError
from flatshortener.exceptions import InvalidURLError, InvalidAliasError
from flatshortener.handlers.context import HandlerContext
from flatshortener.types import HandlerEvent, HandlerResponse
from flatshortener.utils.helpers import (
    get_short_url,
    guarantee_500_response,
    normalize_url,
    parse_body,
    validate_alias,
)
from flatshortener.utils.responses import response_200, response_400, response_409, response_500
from flatshortener.handlers.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_URL,
    INVALID_URL,
    INVALID_ALIAS,
    ALIAS_TAKEN,
    STORE_WRITE_FAILED,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def handler(event: HandlerEvent, context: HandlerContext) -> HandlerResponse:
    """Handle incoming requests to shorten URLs

    This handler follows this procedure to shorten URLs:
    - Step 1: Decode the request body (JSON or HTML form)
    - Step 2: Validate and normalize the target URL
    - Step 3: Validate the optional custom alias
    - Step 4: Reserve the alias or generate the next shortcode (via DAO)
    - Step 5: Respond to user with 200 success

    HTTP responses:
        200: Successful URL shortening
            message: success message
            shortUrl: newly generated short url
            code: newly generated shortcode
            url: normalized target url
        400: Bad client request
            message: invalid body, missing or invalid url, invalid customAlias
        409: Conflict
            message: customAlias already in use
        500: Internal server error
            message: the store could not be written

    Args:
        event (HandlerEvent):
            Request event with 'body', 'headers' and 'requestContext'.
        context (HandlerContext):
            Application resources (DAO, public base URL).

    Returns:
        HandlerResponse:
            Response dictionary with statusCode, headers and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}'}
        >>> response = handler(event, context)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['shortUrl']
        'http://localhost:3000/1'
    """
    # 1- Decode request body
    try:
        request_body = parse_body(event)
    except ValueError:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    # 2- Validate and normalize target URL
    target_url = request_body.get('url')
    if not target_url:
        logger.info('Missing "url" in request body. Responding with 400.', extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in request body", error_code=MISSING_URL)
    try:
        target_url = normalize_url(target_url)
    except InvalidURLError:
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_URL})
        return response_400(message='invalid URL', error_code=INVALID_URL)

    # 3- Validate optional custom alias (empty means "no alias")
    alias = request_body.get('customAlias') or None
    if alias is not None:
        try:
            validate_alias(alias)
        except InvalidAliasError:
            logger.info('Invalid custom alias. Responding with 400.', extra={'event': INVALID_ALIAS})
            return response_400(
                message='invalid customAlias, use letters, numbers, _ or -',
                error_code=INVALID_ALIAS,
            )

    # 4- Reserve alias or generate shortcode, then persist (via DAO)
    try:
        short_url = context.dao.shorten(target_url, alias=alias)
    except ShortURLAlreadyExistsError:
        logger.info(
            'Custom alias already in use. Responding with 409.',
            extra={'shortcode': alias, 'event': ALIAS_TAKEN},
        )
        return response_409(message='custom alias already in use', error_code=ALIAS_TAKEN)
    except DataStoreError:
        logger.exception('Failed to persist new short URL. Responding with 500.', extra={'event': STORE_WRITE_FAILED})
        return response_500(error_code=STORE_WRITE_FAILED)

    # 5- Return successful response to user
    short_url_string = get_short_url(short_url.shortcode, event, context.public_base_url)
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortcode': short_url.shortcode, 'event': SHORTEN_SUCCESS},
    )
    return response_200(
        {
            'message': f'Successfully shortened {target_url} to {short_url_string}',
            'shortUrl': short_url_string,
            'code': short_url.shortcode,
            'url': target_url,
        }
    )
