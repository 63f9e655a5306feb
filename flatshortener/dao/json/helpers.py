import os
import json
import functools
import contextlib
import tempfile
from pathlib import Path
from typing import TypeVar, Any
from collections.abc import Callable

from flatshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_file_errors(method: F) -> F:
    """Wrap file-interacting DAO methods to handle OS-level errors

    Args:
        method (Callable[..., Any]):
            DAO method reading or writing the store file which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on file system issues.

    Example:
        >>> @handle_file_errors
        ... def flush(self):
        ...     self.path.write_text('{}')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise DataStoreError(f"Can't access store file at {self.path}.") from e

    return wrapper


def atomic_write_json(path: Path, document: Any) -> None:
    """Write `document` as pretty-printed JSON, replacing `path` atomically

    The document goes to a temporary file in the same directory first, then
    replaces the target with os.replace(). Readers see either the old or the
    new content, never a partially written file.

    Raises:
        OSError: If the temporary file can't be written or moved into place.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
