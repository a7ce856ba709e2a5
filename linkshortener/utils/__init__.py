from linkshortener.utils.base62 import encode, decode
from linkshortener.utils.config import app_env, app_name, app_prefix, load_config, counter_settings, dao_kwargs
from linkshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'encode',
    'decode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'counter_settings',
    'dao_kwargs',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
