"""Utility functions for application configuration management.

Configuration is assembled from three layers, in increasing precedence:

    1. Built-in defaults (see flatshortener.constants.Defaults)
    2. An optional YAML file, chosen by `CONFIG_FILE` or found at
       `<project root>/config/<APP_ENV>.yml`
    3. Environment variables (`PORT`, `DB_FILE`, `PUBLIC_BASE_URL`,
       `STRICT_LOAD`, `LOG_LEVEL`)

A YAML configuration file looks like this:

    port: 8080
    db_file: /var/lib/flatshortener/urls.json
    public_base_url: https://go.example.com
    strict_load: true
    log_level: DEBUG

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    config_file() -> Path | None
        Return the YAML configuration file to use, if any.

    load_config() -> dict
        Return the merged configuration as a Python dictionary.

Example:
    >>> from flatshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['port']
    3000
"""

import os
import logging
from pathlib import Path
from typing import Any

import yaml

from flatshortener.types import AppConfig
from flatshortener.constants import ENV, Defaults
from flatshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

CONFIG_KEYS = frozenset({'port', 'db_file', 'public_base_url', 'strict_load', 'log_level'})
TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
FALSY = frozenset({'0', 'false', 'no', 'off', ''})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'prod'
        >>> app_env()
        'prod'
    """
    return os.environ.get(ENV.App.APP_ENV, Defaults.APP_ENV).lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Uses the PROJECT_ROOT environment variable, falling back to the current
    working directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.getcwd()))


def config_file() -> Path | None:
    """Return the YAML configuration file for this environment, or None

    An explicit `CONFIG_FILE` must exist. The per-environment file
    `<project root>/config/<app env>.yml` is optional.

    Raises:
        BadConfigurationError: If `CONFIG_FILE` points to a missing file.
    """
    explicit = os.environ.get(ENV.App.CONFIG_FILE)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise BadConfigurationError(f"Configuration file '{path}' does not exist.")
        return path

    path = project_root() / 'config' / f'{app_env()}.yml'
    return path if path.is_file() else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise BadConfigurationError(f"Can't read configuration file '{path}'.") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadConfigurationError(f"Configuration file '{path}' must contain a mapping.")

    unknown = set(data) - CONFIG_KEYS
    if unknown:
        logger.warning('Ignoring unknown configuration keys.', extra={'configFile': str(path), 'keys': sorted(unknown)})
    return {k: v for k, v in data.items() if k in CONFIG_KEYS}


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Port must be an integer (given value: {value!r}).') from e
    if not 1 <= port <= 65535:
        raise BadConfigurationError(f'Port must be between 1 and 65535 (given value: {port}).')
    return port


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUTHY:
        return True
    if text in FALSY:
        return False
    raise BadConfigurationError(f'Expected a boolean flag (given value: {value!r}).')


def load_config() -> AppConfig:
    """Load the application's configuration

    Returns:
        dict: merged configuration with keys:
            port (int), db_file (Path), public_base_url (str | None),
            strict_load (bool), log_level (str)

    Raises:
        BadConfigurationError:
            If the YAML file is unreadable or a value is invalid.

    Example:
        >>> os.environ['PORT'] = '8080'
        >>> load_config()['port']
        8080
    """
    config: dict[str, Any] = {
        'port': Defaults.PORT,
        'db_file': Defaults.DB_FILE,
        'public_base_url': None,
        'strict_load': False,
        'log_level': Defaults.LOG_LEVEL,
    }

    path = config_file()
    if path is not None:
        logger.debug('Loading configuration file.', extra={'configFile': str(path)})
        config.update(_read_yaml(path))

    overrides = {
        'port': os.environ.get(ENV.Server.PORT),
        'db_file': os.environ.get(ENV.Store.DB_FILE),
        'public_base_url': os.environ.get(ENV.Server.PUBLIC_BASE_URL),
        'strict_load': os.environ.get(ENV.Store.STRICT_LOAD),
        'log_level': os.environ.get(ENV.App.LOG_LEVEL),
    }
    config.update({k: v for k, v in overrides.items() if v})

    db_file = Path(config['db_file'])
    if not db_file.is_absolute():
        db_file = project_root() / db_file

    return {
        'port': _parse_port(config['port']),
        'db_file': db_file,
        'public_base_url': config['public_base_url'] or None,
        'strict_load': _parse_bool(config['strict_load']),
        'log_level': str(config['log_level']).upper(),
    }
