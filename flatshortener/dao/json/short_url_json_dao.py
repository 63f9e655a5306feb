"""Data Access Object (DAO) implementation for managing shortened URLs in a JSON file

This module provides a JSON-file-based implementation of ShortURLBaseDAO for
CRUD-like operations with ShortURLModel instances.

Responsibilities:
    - Insert and retrieve short URLs;
    - Assign counter-based shortcodes or reserve custom aliases;
    - Track per-link visit counters and last visit timestamps;
    - Persist the whole store after every mutation;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    ShortURLJsonDAO:
        DAO for storing and retrieving ShortURLModel in a JSON file.

Example:
    >>> from flatshortener.dao.json import ShortURLJsonDAO

    >>> dao = ShortURLJsonDAO(path='urls.json')

    >>> dao.shorten('https://example.com/page').shortcode
    '1'
    >>> dao.shorten('https://example.com/page', alias='my-link').shortcode
    'my-link'

    >>> dao.hit('my-link').visits
    1
    >>> dao.count()
    1
"""

from beartype import beartype

from flatshortener.models import ShortURLModel
from flatshortener.dao.base import ShortURLBaseDAO
from flatshortener.dao.json.mixins import JsonFileMixin
from flatshortener.dao.json.helpers import handle_file_errors
from flatshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError
from flatshortener.utils.helpers import utcnow, validate_alias
from flatshortener.utils.shortener import generate_shortcode


class ShortURLJsonDAO(JsonFileMixin, ShortURLBaseDAO):
    """JSON-file-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface on top of a single
    JSON file which is loaded once and rewritten in full after every mutation.

    Attributes (see JsonFileMixin):
        path (Path):
            Location of the store file.
        lock (threading.RLock):
            Serializes mutations so that concurrent requests can't lose updates.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLJsonDAO:
            Insert a short URL mapping.
            Raises ShortURLAlreadyExistsError when a URL with the same shortcode exists.
            Raises DataStoreError when the store file can't be written.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL mapping and its visit metadata by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.

        hit(shortcode: str, **kwargs) -> ShortURLModel:
            Count a visit and return the updated mapping.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises DataStoreError when the store file can't be written.

        count(increment: bool = False, **kwargs) -> int:
            Retrieve (and optionally increment) the last assigned id.

        shorten(target: str, alias: str | None = None, **kwargs) -> ShortURLModel:
            Create a mapping under a custom alias or the next counter-based shortcode.
    """

    @handle_file_errors
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLJsonDAO':
        """Insert a short URL mapping and persist the store

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLJsonDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                If the store file can't be written. The mapping is not kept.
        """
        with self.lock:
            self._require_ready()
            if short_url.shortcode in self._entries:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            self._insert(short_url)
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist.

        Example:
            >>> dao.get('1')
            ShortURLModel(target='https://example.com/', shortcode='1', ...)
        """
        with self.lock:
            try:
                return self._entries[shortcode]
            except KeyError:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from None

    @handle_file_errors
    @beartype
    def hit(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Count a visit of a short URL and persist the store.

        NOTE: the visit is recorded in memory before the store is written. If
              writing fails, DataStoreError is raised but the visit stays
              counted and reaches the file with the next successful flush.

        Return:
            ShortURLModel:
                the mapping with the incremented visit counter.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given short code exists.
            DataStoreError:
                If the store file can't be written.

        Example:
            >>> dao.hit('1').visits
            1
        """
        with self.lock:
            self._require_ready()
            if shortcode not in self._entries:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

            short_url = self._entries[shortcode].visited(utcnow())
            self._entries[shortcode] = short_url
            self._flush()
        return short_url

    @handle_file_errors
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve the last assigned id

        Args:
            increment (bool):
                If True, increments (and persists) the counter. Otherwise, retrieves its value.

        Example:
            >>> dao.count(increment=False)
            123
            >>> dao.count(increment=True)
            124
        """
        with self.lock:
            if increment:
                self._require_ready()
                self._last_id += 1
                self._flush()
            return self._last_id

    @handle_file_errors
    @beartype
    def shorten(self, target: str, alias: str | None = None, **kwargs) -> ShortURLModel:
        """Create a short URL for `target` and persist the store

        With an alias, the alias becomes the shortcode. Otherwise the counter is
        incremented and encoded, looping until the resulting code is free.

        Args:
            target (str):
                Normalized absolute URL.
            alias (str | None):
                Optional custom shortcode made of [0-9A-Za-z_-].

        Returns:
            ShortURLModel: the new mapping with 0 visits.

        Raises:
            InvalidAliasError:
                If the alias contains forbidden characters.
            ShortURLAlreadyExistsError:
                If the alias is already taken.
            DataStoreError:
                If the store file can't be written. The mapping is not kept.

        Example:
            >>> dao.shorten('https://example.com/a')
            ShortURLModel(target='https://example.com/a', shortcode='1', ...)
        """
        if alias is not None:
            validate_alias(alias)

        with self.lock:
            self._require_ready()

            if alias is not None:
                shortcode = alias
                if shortcode in self._entries:
                    raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")
            else:
                # Codes of custom aliases may collide with future counter values
                # (e.g. alias 'z' vs. counter 35), so skip codes already taken.
                while True:
                    self._last_id += 1
                    shortcode = generate_shortcode(self._last_id)
                    if shortcode not in self._entries:
                        break

            short_url = ShortURLModel(target=target, shortcode=shortcode, created_at=utcnow())
            self._insert(short_url)
        return short_url

    def _insert(self, short_url: ShortURLModel) -> None:
        """Add a mapping and flush; undo the addition if the flush fails (caller holds the lock)."""
        self._entries[short_url.shortcode] = short_url
        try:
            self._flush()
        except OSError:
            del self._entries[short_url.shortcode]
            raise
