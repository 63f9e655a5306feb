"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel that already exists.

    DataStoreError:
        Raised when the data store can't be read or written (e.g. permissions, full disk, etc.).

    CorruptDataStoreError:
        Raised when the store file exists but can't be parsed into a store document.

Example:
    >>> from flatshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    flatshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is not found in the data store."""

    pass


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortURLModel that already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. unreadable file, permission issues, full disk, etc.
    """

    pass


class CorruptDataStoreError(DataStoreError):
    """Exception raised when the store file can't be parsed into a store document."""

    pass
