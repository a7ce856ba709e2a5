import threading
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import redis


class InMemoryRedis:
    """Thread-safe stand-in for the handful of Redis commands the DAOs use.

    Values are stored as strings, like a client created with decode_responses=True.
    MULTI/EXEC pipelines run all their queued commands under a single lock.
    """

    def __init__(self):
        self.data: dict[str, str] = {}
        self.lock = threading.Lock()
        self.connection_pool = SimpleNamespace(connection_kwargs={'host': 'memory', 'port': 6379, 'db': 0})

    def ping(self) -> bool:
        return True

    def get(self, key: str) -> str | None:
        with self.lock:
            return self._get(key)

    def set(self, key: str, value, nx: bool = False) -> bool | None:
        with self.lock:
            return self._set(key, value, nx=nx)

    def incr(self, key: str) -> int:
        with self.lock:
            return self._incr(key)

    def pipeline(self, transaction: bool = True) -> 'InMemoryPipeline':
        return InMemoryPipeline(self)

    def _get(self, key):
        return self.data.get(key)

    def _set(self, key, value, nx=False):
        if nx and key in self.data:
            return None
        self.data[key] = str(value)
        return True

    def _incr(self, key):
        try:
            value = int(self.data.get(key, '0')) + 1
        except ValueError:
            raise redis.exceptions.ResponseError('value is not an integer or out of range') from None
        self.data[key] = str(value)
        return value


class InMemoryPipeline:
    def __init__(self, server: InMemoryRedis):
        self.server = server
        self.commands = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.commands = []

    def set(self, key, value, nx=False):
        self.commands.append((self.server._set, (key, value), {'nx': nx}))
        return self

    def incr(self, key):
        self.commands.append((self.server._incr, (key,), {}))
        return self

    def get(self, key):
        self.commands.append((self.server._get, (key,), {}))
        return self

    def execute(self):
        with self.server.lock:
            results = [command(*args, **kwargs) for command, args, kwargs in self.commands]
        self.commands = []
        return results


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5},
    )
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client


@pytest.fixture
def memory_redis() -> InMemoryRedis:
    """Provide an empty, thread-safe in-memory Redis."""
    return InMemoryRedis()
