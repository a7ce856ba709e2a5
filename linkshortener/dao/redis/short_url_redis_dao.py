"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO. It is the
only component allowed to touch the global counter and the shortcode bindings.

Responsibilities:
    - Seed the global counter with a starting offset (only once per store);
    - Atomically advance the global counter and encode it as a base62 shortcode;
    - Store shortcode -> target URL bindings exactly once;
    - Resolve shortcodes back to target URLs;
    - Translate Redis failures into DAO exceptions.

Redis layout (without a prefix):
    global:url:id       -> INT   global counter
    url:<shortcode>     -> STR   target URL

Classes:
    ShortURLRedisDAO:
        DAO for allocating and resolving short URLs in a Redis datastore.

Example:
    >>> from linkshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(redis_host='localhost', counter_start=100000)
    >>> dao.initialize()
    True
    >>> dao.allocate('https://a.example/')
    'Q0v'
    >>> dao.resolve('Q0v')
    'https://a.example/'
    >>> dao.count()
    100001
"""

import logging

import redis
from beartype import beartype

from linkshortener.constants import Defaults
from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error, redis_location
from linkshortener.dao.exceptions import CounterUnavailableError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from linkshortener.utils.base62 import encode


logger = logging.getLogger(__name__)


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using Redis as a data store.
    Uniqueness of shortcodes relies entirely on the atomicity of Redis commands
    (INCR and SET NX); no state is kept in process memory, so any number of DAO
    instances (threads, processes, Lambda containers) can share one Redis.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        counter_start (int):
            Value the global counter is seeded with if it doesn't exist yet.

    Methods:
        initialize(start: int | None = None, **kwargs) -> bool:
            SET NX the global counter to its starting offset.

        allocate(target: str, **kwargs) -> str:
            Increment the global counter, encode it and bind the shortcode to target.
            Raises CounterUnavailableError when the counter can't be incremented.

        resolve(shortcode: str, **kwargs) -> str:
            Return the target URL bound to shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.

        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Bind a shortcode to a target URL.
            Raises ShortURLAlreadyExistsError when the shortcode is already bound.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL mapping as a ShortURLModel.

        count(**kwargs) -> int | None:
            Retrieve the global counter without incrementing it.

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, *args, counter_start: int = Defaults.COUNTER_START, **kwargs):
        if not isinstance(counter_start, int) or isinstance(counter_start, bool):
            raise TypeError(f'Counter start must be of type integer (given type: {type(counter_start)}).')
        if counter_start <= 0:
            raise ValueError(f'Counter start must be a positive integer (given value: {counter_start}).')

        super().__init__(*args, **kwargs)
        self.counter_start = counter_start

    @handle_redis_connection_error
    @beartype
    def initialize(self, start: int | None = None, **kwargs) -> bool:
        """Seed the global counter with its starting offset, only if it doesn't exist

        Re-running initialization is always safe: an existing counter is never
        reset, so previously issued shortcodes can't be handed out again.

        Args:
            start (int | None):
                Starting offset. Defaults to self.counter_start.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            bool: True if the counter was created by this call, False if it already existed.

        Raises:
            ValueError:
                If start isn't a positive integer.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.initialize(start=100000)
            True
            >>> dao.initialize(start=5)
            False
        """
        start = self.counter_start if start is None else start
        if start <= 0:
            raise ValueError(f'Counter start must be a positive integer (given value: {start}).')

        counter_key = self.keys.counter_key()
        created = bool(self.redis.set(counter_key, start, nx=True))
        if created:
            logger.info('Initialized global counter.', extra={'counterKey': counter_key, 'counter': start})
        else:
            logger.debug('Global counter already initialized.', extra={'counterKey': counter_key})
        return created

    @handle_redis_connection_error
    @beartype
    def allocate(self, target: str, **kwargs) -> str:
        """Allocate a fresh shortcode for target and store the binding

        Procedure:
            - Step 1: Atomically increment the global counter (see _next_counter())
            - Step 2: Base62-encode the new counter value
            - Step 3: SET NX url:<shortcode> <target>

        If step 1 fails nothing is written. The increment is never retried.

        Args:
            target (str):
                The original long URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str: the newly allocated shortcode.

        Raises:
            CounterUnavailableError:
                If the counter increment failed or returned no usable value.
            ShortURLAlreadyExistsError:
                If the encoded counter value is already bound (the counter was reset externally).
            DataStoreError:
                If Redis connectivity issues occur while storing the binding.

        Example:
            >>> dao.allocate('https://example.com')
            'Q0v'
        """
        counter = self._next_counter()
        shortcode = encode(counter)
        self.insert(ShortURLModel(target=target, shortcode=shortcode))

        logger.debug('Allocated shortcode.', extra={'shortcode': shortcode, 'counter': counter})
        return shortcode

    def _next_counter(self) -> int:
        """INCR the global counter and return its new value

        NOTE: The SET NX and INCR commands are executed as one transaction so an
              allocation never runs against an uninitialized counter. Without it,
              INCR on a missing key would start counting from 1:

              (lambda 1): ShortURLRedisDAO.allocate():
                          -> INCR global:url:id          => 1 (counter missing)
              (bootstrap): ShortURLRedisDAO.initialize():
                          -> SET global:url:id 100000 NX => nil (already exists)

              and the starting offset would never be applied.
        """
        counter_key = self.keys.counter_key()
        try:
            with self.redis.pipeline(transaction=True) as pipe:
                pipe.set(counter_key, self.counter_start, nx=True)
                pipe.incr(counter_key)
                _, counter = pipe.execute()
        except redis.exceptions.RedisError as e:
            raise CounterUnavailableError(f"Can't increment counter '{counter_key}' at {redis_location(self.redis)}.") from e

        if not isinstance(counter, int) or isinstance(counter, bool) or counter <= 0:
            raise CounterUnavailableError(f"Counter '{counter_key}' returned an unusable value ({counter!r}).")
        return counter

    @handle_redis_connection_error
    @beartype
    def resolve(self, shortcode: str, **kwargs) -> str:
        """Return the target URL bound to shortcode

        NOTE: a resolve racing the allocate() that creates the binding may
              observe ShortURLNotFoundError until the SET is visible.

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            str: the target URL, unchanged.

        Raises:
            ShortURLNotFoundError:
                If the shortcode isn't bound.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.resolve('Q0v')
            'https://example.com'
        """
        target = self.redis.get(self.keys.link_url_key(shortcode))
        if target is None:
            raise ShortURLNotFoundError(shortcode)
        if isinstance(target, bytes):
            target = target.decode('utf-8')
        return target

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Bind a shortcode to its target URL

        A single SET NX both checks and writes the binding, so an existing
        binding is never overwritten.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        link_url_key = self.keys.link_url_key(short_url.shortcode)
        if not self.redis.set(link_url_key, short_url.target, nx=True):
            raise ShortURLAlreadyExistsError(short_url.shortcode)
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('Q0v')
            ShortURLModel(target='https://example.com', shortcode='Q0v')
        """
        return ShortURLModel(target=self.resolve(shortcode), shortcode=shortcode)

    @handle_redis_connection_error
    def count(self, **kwargs) -> int | None:
        """Retrieve the global counter without incrementing it

        Returns:
            int | None:
                The current counter value. None if the counter was never initialized.

        Example:
            >>> dao.count()
            100001
        """
        counter = self.redis.get(self.keys.counter_key())
        return None if counter is None else int(counter)
