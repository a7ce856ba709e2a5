"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`) and deployed to the
corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 3,
        "active_backend": "redis",
        "counter": {
            "key": "global:url:id",
            "start": 100000
        },
        "configs": {
            "shorten_url": {
                "redis": { ... }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) from this AppConfig
document, together with the shared `"counter"` section.

When running under `sam local` with `REDIS_HOST` set, the configuration is
built from environment variables instead (see ENV.Local).

Typical usage inside a Lambda handler:
    >>> from linkshortener.utils.config import load_config, dao_kwargs
    >>> config = load_config('shorten_url')
    >>> config['redis']['host']
    'redis-15501.host.docker.internal'
    >>> dao = ShortURLRedisDAO(**dao_kwargs(config))
"""

import os
import json
import functools
import logging
from typing import Any
from collections.abc import Callable

import boto3

from linkshortener.constants import ENV, Defaults
from linkshortener.exceptions import BadConfigurationError
from linkshortener.models import CounterSettings
from linkshortener.types import AppConfig, LambdaConfiguration
from linkshortener.utils.helpers import require_environment
from linkshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs as <app name>:<app env>, None if APP_NAME is not set"""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _int_setting(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadConfigurationError(f"Setting '{name}' must be an integer (given value: {value!r}).") from None


def _load_local_config(func: Callable) -> Callable:
    """Decorator: build the configuration from environment variables under SAM

    Behavior:
        - If the application is running locally and `REDIS_HOST` is set, return
          a configuration made from the ENV.Local environment variables.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        host = os.getenv(ENV.Local.REDIS_HOST)
        if not running_locally() or not host:
            return func(lambda_name)

        redis_config = {
            'host': host,
            'port': _int_setting(ENV.Local.REDIS_PORT, os.getenv(ENV.Local.REDIS_PORT, '6379')),
            'db': _int_setting(ENV.Local.REDIS_DB, os.getenv(ENV.Local.REDIS_DB, '0')),
        }
        for setting, name in (('username', ENV.Local.REDIS_USERNAME), ('password', ENV.Local.REDIS_PASSWORD)):
            if os.getenv(name):
                redis_config[setting] = os.getenv(name)

        counter_config = {
            'key': os.getenv(ENV.Local.COUNTER_KEY, Defaults.COUNTER_KEY),
            'start': _int_setting(ENV.Local.COUNTER_START, os.getenv(ENV.Local.COUNTER_START, Defaults.COUNTER_START)),
        }

        logger.debug('Loaded configuration from environment variables.', extra={'lambdaName': lambda_name})
        return {'redis': redis_config, 'counter': counter_config}

    return wrapper


def _lambda_section(document: AppConfig, lambda_name: str) -> LambdaConfiguration:
    """Extract the active backend's config for lambda_name plus the shared counter settings"""
    try:
        backend = document['active_backend']
        data = {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no '{lambda_name}' configuration for the active backend.") from e

    data['counter'] = document.get('counter') or {}
    return data


@_load_local_config
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {'<backend>': {...}, 'counter': {...}}

    Raises:
        MissingEnvironmentVariableError:
            If an AppConfig identifier is not set.
        BadConfigurationError:
            If the AppConfig document is not valid JSON or lacks the Lambda's section.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BadConfigurationError('AppConfig document is not valid JSON.') from e

    data = _lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data


def counter_settings(config: LambdaConfiguration) -> CounterSettings:
    """Read the global counter settings from a Lambda configuration

    Missing values fall back to Defaults.COUNTER_KEY and Defaults.COUNTER_START.

    Raises:
        BadConfigurationError:
            If the key is not a non-empty string or the start is not a positive integer.

    Example:
        >>> counter_settings({'redis': {...}, 'counter': {'start': 5000}})
        CounterSettings(key='global:url:id', start=5000)
    """
    counter = config.get('counter') or {}
    key = counter.get('key', Defaults.COUNTER_KEY)
    start = _int_setting('counter.start', counter.get('start', Defaults.COUNTER_START))

    if not isinstance(key, str) or not key:
        raise BadConfigurationError(f"Setting 'counter.key' must be a non-empty string (given value: {key!r}).")
    if start <= 0:
        raise BadConfigurationError(f"Setting 'counter.start' must be a positive integer (given value: {start}).")
    return CounterSettings(key=key, start=start)


def dao_kwargs(config: LambdaConfiguration) -> dict[str, Any]:
    """Translate a Lambda configuration into ShortURLRedisDAO keyword arguments

    Example:
        >>> dao_kwargs({'redis': {'host': 'redis', 'port': 6379}})
        {'redis_host': 'redis', 'redis_port': 6379, 'prefix': None, 'counter_key': 'global:url:id', 'counter_start': 100000}
    """
    if not isinstance(config.get('redis'), dict):
        raise BadConfigurationError("Configuration has no 'redis' section.")

    counter = counter_settings(config)
    kwargs = {f'redis_{k}': v for k, v in config['redis'].items()}
    kwargs.update(prefix=app_prefix(), counter_key=counter.key, counter_start=counter.start)
    return kwargs
