from dataclasses import dataclass

from flatshortener.dao.base import ShortURLBaseDAO


@dataclass(frozen=True)
class HandlerContext:
    """Per-application resources handed to every request handler.

    Attributes:
        dao (ShortURLBaseDAO):
            Store owning all short URL mappings.
        public_base_url (str | None):
            Base used to build short URLs. When None, the request's own
            scheme and host are used.
    """

    dao: ShortURLBaseDAO
    public_base_url: str | None = None
