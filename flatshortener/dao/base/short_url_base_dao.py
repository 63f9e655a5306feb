"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g. a JSON file, SQLite, Redis).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortURLModel objects.
    - Provide the shorten operation (alias reservation or counter-based codes).
    - Track link visits.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from flatshortener.dao.json import ShortURLJsonDAO

        >>> dao = ShortURLJsonDAO(path='urls.json')

        >>> short_url = dao.shorten('https://example.com/blog/article-123')
        >>> short_url.shortcode
        '1'

        >>> dao.hit('1').visits
        1

        >>> dao.get('1').target
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod

from flatshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store.
            Raises ShortURLAlreadyExistsError if the short code already exists.
            Raises DataStoreError on write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by short code.
            Raises ShortURLNotFoundError if the entry does not exist.

        count(increment: bool, **kwargs) -> int:
            Return counter from data store.
            Optionally increment counter before retrieving.
            Raises DataStoreError on write failure.

        hit(shortcode: str, **kwargs) -> ShortURLModel:
            Record a visit of a short URL and return the updated mapping.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on write failure.

        shorten(target: str, alias: str | None, **kwargs) -> ShortURLModel:
            Create a new mapping, either under a custom alias or under the
            next free counter-based shortcode.

    Subclassing:
        Datastore-specific implementations (e.g. ShortURLJsonDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Mappings never expire and there is no interface to delete entries.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same short code already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its short code.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given short code exists.
        """
        pass

    @abstractmethod
    def count(self, increment: bool = False, **kwargs) -> int:
        """Retrieve the current counter value from the data store.

        Args:
            increment (bool):
                If True, increment the counter by 1 before returning the value.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Increment the visit counter of a short URL and stamp the visit time.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given short code exists.

            DataStoreError:
                If the visit couldn't be persisted. The visit is still
                counted in memory.
        """
        pass

    @abstractmethod
    def shorten(self, target: str, alias: str | None = None, **kwargs) -> ShortURLModel:
        """Create and persist a mapping for `target`.

        Args:
            target (str):
                Absolute URL to shorten.

            alias (str | None):
                Custom shortcode. When None, the next counter value is encoded.

        Returns:
            ShortURLModel: the newly created mapping.

        Raises:
            InvalidAliasError:
                If `alias` contains characters outside [0-9A-Za-z_-].

            ShortURLAlreadyExistsError:
                If `alias` is already in use.

            DataStoreError:
                If the new mapping couldn't be persisted.
        """
        pass
