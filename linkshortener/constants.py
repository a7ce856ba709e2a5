from enum import StrEnum


class Defaults:
    """Default identifier store settings."""

    # Redis key holding the global short URL counter
    COUNTER_KEY = 'global:url:id'
    # First value the counter is seeded with; the first allocated code encodes COUNTER_START + 1
    COUNTER_START = 100_000
    # Namespace for short code -> long URL bindings, e.g. url:Q0v
    LINK_KEY_PREFIX = 'url'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Local(StrEnum):
        # Used instead of AppConfig when running under `sam local`
        REDIS_HOST = 'REDIS_HOST'
        REDIS_PORT = 'REDIS_PORT'
        REDIS_DB = 'REDIS_DB'
        REDIS_USERNAME = 'REDIS_USERNAME'
        REDIS_PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
        COUNTER_KEY = 'COUNTER_KEY'
        COUNTER_START = 'COUNTER_START'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
