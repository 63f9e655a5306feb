from enum import StrEnum


class Defaults:
    """Default configuration values."""

    PORT = 3000
    DB_FILE = 'urls.json'
    LOG_LEVEL = 'INFO'
    APP_ENV = 'local'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_FILE = 'CONFIG_FILE'

    class Server(StrEnum):
        PORT = 'PORT'
        PUBLIC_BASE_URL = 'PUBLIC_BASE_URL'

    class Store(StrEnum):
        DB_FILE = 'DB_FILE'
        STRICT_LOAD = 'STRICT_LOAD'  # refuse to start on an unreadable store file


# Shortcode alphabet: 10 digits + 26 lowercase + 26 uppercase
ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'

# Allowed characters for custom aliases
ALIAS_PATTERN = r'^[0-9A-Za-z_-]+$'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
