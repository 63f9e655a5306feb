from typing import Any

from flatshortener.models import ShortURLModel
from flatshortener.types import StoreDocument
from flatshortener.utils.helpers import isoformat_utc, parse_isoformat


__all__ = ['StoreDocumentSchema']


class StoreDocumentSchema:
    """Translate between the in-memory store and its JSON document.

    Document layout:

        {
            "lastId": 2,
            "urls": {
                "1": {
                    "url": "https://example.com/a",
                    "createdAt": "2025-10-15T12:00:00.000Z",
                    "visits": 1,
                    "lastVisited": "2025-10-15T12:05:00.000Z"
                }
            }
        }

    `lastVisited` is omitted until the first visit.
    """

    LAST_ID = 'lastId'
    URLS = 'urls'
    URL = 'url'
    CREATED_AT = 'createdAt'
    VISITS = 'visits'
    LAST_VISITED = 'lastVisited'

    def empty(self) -> StoreDocument:
        return {self.LAST_ID: 0, self.URLS: {}}

    def dump_record(self, short_url: ShortURLModel) -> dict[str, Any]:
        record = {
            self.URL: short_url.target,
            self.CREATED_AT: isoformat_utc(short_url.created_at),
            self.VISITS: short_url.visits,
        }
        if short_url.last_visited is not None:
            record[self.LAST_VISITED] = isoformat_utc(short_url.last_visited)
        return record

    def load_record(self, shortcode: str, record: Any) -> ShortURLModel:
        """Build a ShortURLModel from a stored record.

        Raises:
            ValueError: If the record is malformed.
        """
        if not isinstance(record, dict):
            raise ValueError(f"Record for '{shortcode}' must be an object.")

        target = record.get(self.URL)
        if not isinstance(target, str) or not target:
            raise ValueError(f"Record for '{shortcode}' has no target URL.")

        visits = record.get(self.VISITS) or 0
        if not isinstance(visits, int) or isinstance(visits, bool) or visits < 0:
            raise ValueError(f"Record for '{shortcode}' has an invalid visit count ({visits!r}).")

        last_visited = record.get(self.LAST_VISITED)
        try:
            return ShortURLModel(
                target=target,
                shortcode=shortcode,
                created_at=parse_isoformat(record[self.CREATED_AT]),
                visits=visits,
                last_visited=parse_isoformat(last_visited) if last_visited else None,
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Record for '{shortcode}' has missing or invalid timestamps.") from e

    def dump(self, last_id: int, entries: dict[str, ShortURLModel]) -> StoreDocument:
        return {
            self.LAST_ID: last_id,
            self.URLS: {code: self.dump_record(short_url) for code, short_url in entries.items()},
        }

    def load(self, document: Any) -> tuple[int, dict[str, ShortURLModel]]:
        """Validate a parsed JSON document and return (last id, entries).

        Raises:
            ValueError: If the document doesn't follow the store layout.
        """
        if not isinstance(document, dict):
            raise ValueError('Store document must be a JSON object.')

        last_id = document.get(self.LAST_ID)
        if not isinstance(last_id, int) or isinstance(last_id, bool) or last_id < 0:
            raise ValueError(f"'{self.LAST_ID}' must be a non-negative integer (given value: {last_id!r}).")

        urls = document.get(self.URLS)
        if not isinstance(urls, dict):
            raise ValueError(f"'{self.URLS}' must be a JSON object.")

        entries = {code: self.load_record(code, record) for code, record in urls.items()}
        return last_id, entries
