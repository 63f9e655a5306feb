"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the service is running on a developer machine, False otherwise.

Example:
    >>> from flatshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'prod'
    >>> running_locally()
    False
"""

import os

from flatshortener.constants import ENV


def running_locally() -> bool:
    """Return True only if APP_ENV is explicitly set to 'local'."""
    return os.getenv(ENV.App.APP_ENV, '').lower() == 'local'
