"""Unit tests for the ShortURLRedisDAO

Test coverage includes:

1. Initialization and configuration
   - Ensures invalid counter offsets are rejected.
   - Confirms an unreachable Redis raises DataStoreError.

2. Counter initialization
   - Ensures the counter is seeded with SET NX and the configured offset.
   - Confirms an existing counter is left untouched.
   - Confirms Redis connection errors raise DataStoreError.

3. Allocation behavior
   - Ensures the counter is incremented atomically and its value base62-encoded.
   - Confirms counter failures raise CounterUnavailableError and write nothing.
   - Confirms taken shortcodes raise ShortURLAlreadyExistsError.
   - Ensures invalid types raise Beartype errors.

4. Resolution behavior
   - Ensures bound shortcodes return their target URL unchanged.
   - Confirms unknown shortcodes raise ShortURLNotFoundError carrying the code.
   - Confirms Redis connection errors raise DataStoreError (not ShortURLNotFoundError).

5. Model-level operations
   - insert() / get() wrap the binding key with ShortURLModel.

6. Counter reads
   - Ensures count() reads without incrementing.
"""

import re
from unittest.mock import call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from linkshortener.models import ShortURLModel
from linkshortener.dao.exceptions import (
    CounterUnavailableError,
    DataStoreError,
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
)
from linkshortener.dao.redis import ShortURLRedisDAO


COUNTER_KEY = 'testapp:test:global:url:id'
LINK_KEY = 'testapp:test:url:Q0v'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(redis_client, app_prefix):
    """Create a ShortURLRedisDAO instance with a mocked Redis client."""
    return ShortURLRedisDAO(redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


@pytest.mark.parametrize('counter_start', [0, -1])
def test_non_positive_counter_start_raises_error(redis_client, counter_start):
    with pytest.raises(ValueError, match='positive integer'):
        ShortURLRedisDAO(redis_client=redis_client, counter_start=counter_start)


@pytest.mark.parametrize('counter_start', ['100000', 1.5, True])
def test_invalid_counter_start_type_raises_error(redis_client, counter_start):
    with pytest.raises(TypeError):
        ShortURLRedisDAO(redis_client=redis_client, counter_start=counter_start)


def test_unreachable_redis_raises_error(redis_client):
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match=re.escape("Can't connect to Redis at 203.0.113.1:18000/5.")):
        ShortURLRedisDAO(redis_client=redis_client)


def test_default_keys_are_unprefixed(redis_client):
    dao = ShortURLRedisDAO(redis_client=redis_client)
    assert dao.keys.counter_key() == 'global:url:id'
    assert dao.keys.link_url_key('Q0v') == 'url:Q0v'
    assert dao.counter_start == 100000


# -------------------------------
# 2. Counter initialization
# -------------------------------


def test_initialize_creates_counter(dao, redis_client):
    """Ensure initialize() seeds the counter with SET NX."""
    redis_client.set.return_value = True

    assert dao.initialize() is True
    redis_client.set.assert_called_once_with(COUNTER_KEY, 100000, nx=True)


def test_initialize_leaves_existing_counter_untouched(dao, redis_client):
    """Ensure a second initialize() reports the counter already exists."""
    redis_client.set.return_value = None

    assert dao.initialize() is False
    redis_client.set.assert_called_once_with(COUNTER_KEY, 100000, nx=True)
    redis_client.incr.assert_not_called()


def test_initialize_with_custom_start(dao, redis_client):
    redis_client.set.return_value = True

    assert dao.initialize(start=5000) is True
    redis_client.set.assert_called_once_with(COUNTER_KEY, 5000, nx=True)


@pytest.mark.parametrize('start', [0, -10])
def test_initialize_with_non_positive_start_raises_error(dao, redis_client, start):
    with pytest.raises(ValueError):
        dao.initialize(start=start)
    redis_client.set.assert_not_called()


def test_initialize_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.initialize(start='100000')


def test_initialize_with_redis_connection_error(dao, redis_client):
    redis_client.set.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match=re.escape("Can't connect to Redis at 203.0.113.1:18000/5.")):
        dao.initialize()


# -------------------------------
# 3. Allocation behavior
# -------------------------------


def test_allocate(dao, redis_client):
    """Ensure allocate() increments the counter, encodes it and stores the binding."""
    redis_client.set.return_value = True
    redis_client.execute.return_value = [None, 100001]

    shortcode = dao.allocate('https://a.example/')

    assert shortcode == 'Q0v'
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.incr.assert_called_once_with(COUNTER_KEY)
    redis_client.set.assert_has_calls(
        [
            call(COUNTER_KEY, 100000, nx=True),
            call(LINK_KEY, 'https://a.example/', nx=True),
        ],
        any_order=False,
    )


def test_allocate_uses_configured_counter(redis_client):
    redis_client.set.return_value = True
    redis_client.execute.return_value = [True, 2]
    dao = ShortURLRedisDAO(redis_client=redis_client, counter_key='links:counter', counter_start=1)

    assert dao.allocate('https://example.com') == '2'
    redis_client.set.assert_any_call('links:counter', 1, nx=True)
    redis_client.incr.assert_called_once_with('links:counter')
    redis_client.set.assert_called_with('url:2', 'https://example.com', nx=True)


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ConnectionError('Connection error'),
        redis.exceptions.TimeoutError('Timeout'),
        redis.exceptions.ResponseError('value is not an integer or out of range'),
    ],
)
def test_allocate_with_failing_counter(dao, redis_client, error):
    """Ensure a failed increment raises CounterUnavailableError and writes no binding."""
    redis_client.execute.side_effect = error

    with pytest.raises(CounterUnavailableError, match=re.escape(f"Can't increment counter '{COUNTER_KEY}'")):
        dao.allocate('https://a.example/')

    # only the queued SET NX of the counter, never the binding
    assert redis_client.set.call_count == 1
    assert call(LINK_KEY, 'https://a.example/', nx=True) not in redis_client.set.call_args_list


@pytest.mark.parametrize('counter', [None, 0, -5, '100001', True])
def test_allocate_with_unusable_counter_value(dao, redis_client, counter):
    redis_client.execute.return_value = [None, counter]

    with pytest.raises(CounterUnavailableError, match='unusable value'):
        dao.allocate('https://a.example/')
    assert redis_client.set.call_count == 1


def test_counter_unavailable_is_a_data_store_error(dao, redis_client):
    redis_client.execute.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError):
        dao.allocate('https://a.example/')


def test_allocate_never_overwrites_existing_binding(dao, redis_client):
    """Ensure a taken shortcode raises ShortURLAlreadyExistsError."""
    redis_client.execute.return_value = [None, 100001]
    redis_client.set.side_effect = [True, None]

    with pytest.raises(ShortURLAlreadyExistsError, match="Short URL with code 'Q0v' already exists.") as exc_info:
        dao.allocate('https://a.example/')
    assert exc_info.value.shortcode == 'Q0v'


def test_allocate_with_redis_connection_error_while_storing(dao, redis_client):
    """Ensure a failed binding write raises DataStoreError, not CounterUnavailableError."""
    redis_client.execute.return_value = [None, 100001]
    redis_client.set.side_effect = [True, redis.exceptions.ConnectionError('Connection error')]

    with pytest.raises(DataStoreError) as exc_info:
        dao.allocate('https://a.example/')
    assert not isinstance(exc_info.value, CounterUnavailableError)


@pytest.mark.parametrize('target', [None, 123, ['https://example.com']])
def test_allocate_with_invalid_type(dao, redis_client, target):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.allocate(target)
    redis_client.incr.assert_not_called()


# -------------------------------
# 4. Resolution behavior
# -------------------------------


def test_resolve(dao, redis_client):
    redis_client.get.return_value = 'https://a.example/'

    assert dao.resolve('Q0v') == 'https://a.example/'
    redis_client.get.assert_called_once_with(LINK_KEY)


def test_resolve_decodes_raw_responses(dao, redis_client):
    redis_client.get.return_value = 'https://a.example/ünïcode?q=1'.encode('utf-8')
    assert dao.resolve('Q0v') == 'https://a.example/ünïcode?q=1'


def test_resolve_unknown_shortcode(dao, redis_client):
    """Ensure unknown shortcodes raise ShortURLNotFoundError carrying the code."""
    redis_client.get.return_value = None

    with pytest.raises(ShortURLNotFoundError, match="Short URL with code 'zzz' not found.") as exc_info:
        dao.resolve('zzz')
    assert exc_info.value.shortcode == 'zzz'


def test_resolve_with_redis_connection_error(dao, redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match=re.escape("Can't connect to Redis at 203.0.113.1:18000/5.")):
        dao.resolve('Q0v')


def test_resolve_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.resolve(12345)


# -------------------------------
# 5. Model-level operations
# -------------------------------


def test_insert(dao, redis_client):
    redis_client.set.return_value = True
    short_url = ShortURLModel(target='https://example.com/test', shortcode='Q0v')

    assert dao.insert(short_url) is dao
    redis_client.set.assert_called_once_with(LINK_KEY, 'https://example.com/test', nx=True)


def test_insert_short_url_which_already_exists(dao, redis_client):
    redis_client.set.return_value = None
    short_url = ShortURLModel(target='https://example.com/duplicate', shortcode='Q0v')

    with pytest.raises(ShortURLAlreadyExistsError):
        dao.insert(short_url)


def test_insert_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_get(dao, redis_client):
    redis_client.get.return_value = 'https://example.com/test'

    assert dao.get('Q0v') == ShortURLModel(target='https://example.com/test', shortcode='Q0v')


def test_get_unknown_shortcode(dao, redis_client):
    redis_client.get.return_value = None

    with pytest.raises(ShortURLNotFoundError):
        dao.get('Q0v')


# -------------------------------
# 6. Counter reads
# -------------------------------


def test_count(dao, redis_client):
    redis_client.get.return_value = '100042'

    assert dao.count() == 100042
    redis_client.get.assert_called_once_with(COUNTER_KEY)
    redis_client.incr.assert_not_called()


def test_count_before_initialization(dao, redis_client):
    redis_client.get.return_value = None
    assert dao.count() is None


def test_count_with_redis_connection_error(dao, redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection Error')

    with pytest.raises(DataStoreError):
        dao.count()
