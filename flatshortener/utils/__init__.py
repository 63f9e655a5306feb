from flatshortener.utils.config import app_env, app_name, project_root, load_config
from flatshortener.utils.helpers import base_url, get_short_url, normalize_url, validate_alias
from flatshortener.utils.shortener import encode, decode, generate_shortcode
from flatshortener.utils.logging import initialize_logging


__all__ = [
    'encode',
    'decode',
    'generate_shortcode',
    'app_env',
    'app_name',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'normalize_url',
    'validate_alias',
    'initialize_logging',
]
