"""JSON file mixin providing shared store loading, locking and persistence.

Responsibilities:
    - Load the store file into memory (or create it when missing)
    - Rewrite the whole store file after every mutation
    - Serialize read-modify-write-persist sequences with a lock

Classes:
    - StoreState: Lifecycle of the in-memory store (UNINITIALIZED -> LOADING -> READY).
    - JsonFileMixin: Base mixin to inject file-backed state into DAOs.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLJsonDAO(JsonFileMixin, ShortURLBaseDAO):
        ...     pass
        ...
        >>> dao = ShortURLJsonDAO(path='urls.json')
        >>> dao.state
        <StoreState.READY: 'ready'>
"""

import os
import json
import logging
import threading
from enum import StrEnum
from pathlib import Path

from flatshortener.models import ShortURLModel
from flatshortener.dao.json.document_schema import StoreDocumentSchema
from flatshortener.dao.json.helpers import atomic_write_json, handle_file_errors
from flatshortener.dao.exceptions import DataStoreError, CorruptDataStoreError


logger = logging.getLogger(__name__)


class StoreState(StrEnum):
    UNINITIALIZED = 'uninitialized'
    LOADING = 'loading'
    READY = 'ready'


class JsonFileMixin:
    """Mixin JSON file persistence for file-backed DAOs.

    Attributes:
        path (Path):
            Location of the store file.

        strict (bool):
            If True, an unreadable store file aborts loading with an error.
            Otherwise the failure is logged and the store starts empty.

        schema (StoreDocumentSchema):
            Translator between in-memory entries and the JSON document.

        lock (threading.RLock):
            Guards every read-modify-write-persist sequence.

        state (StoreState):
            Current lifecycle state of the store.

    NOTE:
        Every flush rewrites the whole file, so a write costs O(total entries).
    """

    def __init__(self, path: str | os.PathLike, strict: bool = False, autoload: bool = True):
        """Initialize a file-backed DAO

        Args:
            path (str | os.PathLike):
                Location of the JSON store file. Parent directories are
                created on the first write.

            strict (bool):
                Refuse to start on an unreadable store file. Defaults to False.

            autoload (bool):
                Load the store file right away. Defaults to True.

        Raises:
            CorruptDataStoreError:
                If strict and the store file can't be parsed.
            DataStoreError:
                If strict and the store file can't be read, or if a missing
                store file can't be created.
        """
        self.path = Path(path)
        self.strict = strict
        self.schema = StoreDocumentSchema()
        self.lock = threading.RLock()
        self.state = StoreState.UNINITIALIZED

        self._last_id = 0
        self._entries: dict[str, ShortURLModel] = {}

        if autoload:
            self.load()

    def load(self) -> None:
        """Load the store file into memory

        Transitions:
            - file parses              -> adopt its contents, READY
            - file missing             -> write an empty store, READY
            - file unreadable/corrupt  -> strict: raise, back to UNINITIALIZED
                                          lenient: log, keep empty store, READY
        """
        with self.lock:
            self.state = StoreState.LOADING
            self._last_id, self._entries = 0, {}

            try:
                self._read()
            except FileNotFoundError:
                try:
                    self._create()
                except DataStoreError:
                    self.state = StoreState.UNINITIALIZED
                    raise
            except CorruptDataStoreError:
                if self.strict:
                    self.state = StoreState.UNINITIALIZED
                    raise
                logger.error(
                    'Store file is corrupt. Starting with an empty store.',
                    exc_info=True,
                    extra={'path': str(self.path)},
                )
                self._quarantine()
            except OSError as e:
                if self.strict:
                    self.state = StoreState.UNINITIALIZED
                    raise DataStoreError(f"Can't read store file at {self.path}.") from e
                logger.error(
                    'Failed to read store file. Starting with an empty store.',
                    exc_info=True,
                    extra={'path': str(self.path)},
                )

            self.state = StoreState.READY
            logger.info('Store loaded.', extra={'path': str(self.path), 'urls': len(self._entries)})

    def _read(self) -> None:
        try:
            document = json.loads(self.path.read_text(encoding='utf-8'))
            self._last_id, self._entries = self.schema.load(document)
        except ValueError as e:  # includes JSONDecodeError and UnicodeDecodeError
            raise CorruptDataStoreError(f"Store file at {self.path} is corrupt: {e}") from e

    @handle_file_errors
    def _create(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._flush()
        logger.info('Created new store file.', extra={'path': str(self.path)})

    def _quarantine(self) -> None:
        """Move a corrupt store file aside so the next flush can't overwrite it."""
        corrupt_path = self.path.with_name(f'{self.path.name}.corrupt')
        try:
            os.replace(self.path, corrupt_path)
        except OSError:
            logger.exception('Failed to move corrupt store file aside.', extra={'path': str(self.path)})
        else:
            logger.warning('Moved corrupt store file aside.', extra={'path': str(corrupt_path)})

    def _flush(self) -> None:
        """Rewrite the whole store file with the in-memory state (caller holds the lock)."""
        atomic_write_json(self.path, self.schema.dump(self._last_id, self._entries))

    def _require_ready(self) -> None:
        if self.state is not StoreState.READY:
            raise DataStoreError(f'Store at {self.path} is not ready (state: {self.state}).')
