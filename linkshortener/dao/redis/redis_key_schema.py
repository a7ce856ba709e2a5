import functools
from collections.abc import Callable

from linkshortener.constants import Defaults


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the global counter and short URL bindings.

    By default keys are left unprefixed, i.e. the counter lives at "global:url:id"
    and bindings at "url:<shortcode>". An optional prefix can be provided to namespace
    all generated keys, e.g. "linkshortener:prod" or "linkshortener:dev".
    """

    def __init__(self, prefix: str | None = None, counter_key: str = Defaults.COUNTER_KEY):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')
        if not isinstance(counter_key, str):
            raise TypeError(f'Counter key must be of type string (given type: {type(counter_key)}).')
        if not counter_key:
            raise ValueError('Counter key must be a non-empty string.')

        self.prefix = prefix
        self._counter_key = counter_key

    @prefix_key
    def link_url_key(self, short_code: str) -> str:
        return f'{Defaults.LINK_KEY_PREFIX}:{short_code}'

    @prefix_key
    def counter_key(self) -> str:
        return self._counter_key
