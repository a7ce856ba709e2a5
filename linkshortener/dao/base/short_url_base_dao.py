"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all identifier store
implementations, regardless of the underlying storage mechanism
(e.g., Redis, DynamoDB, PostgreSQL).

Responsibilities:
    - Own the global counter and every shortcode -> target URL binding.
    - Allocate a fresh, unique shortcode for a target URL.
    - Resolve shortcodes back to their target URLs.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)
        >>> dao.initialize(start=100000)
        True

        >>> shortcode = dao.allocate("https://example.com/blog/article-123")
        >>> shortcode
        'Q0v'

        >>> dao.resolve(shortcode)
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod

from linkshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        initialize(start: int | None = None, **kwargs) -> bool:
            Seed the global counter if it doesn't exist yet.

        allocate(target: str, **kwargs) -> str:
            Atomically advance the counter and bind its encoded value to target.
            Raises CounterUnavailableError if the counter can't be incremented.

        resolve(shortcode: str, **kwargs) -> str:
            Return the target URL bound to shortcode.
            Raises ShortURLNotFoundError if the shortcode is unknown.

        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Store an already built ShortURLModel.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel by shortcode.

        count(**kwargs) -> int | None:
            Return the current counter value without changing it.

    Every method raises DataStoreError on connection or read/write failure.

    NOTE:
        - Bindings are written once and never updated or deleted. The DAO
          does not provide an interface to modify or remove them.
    """

    @abstractmethod
    def initialize(self, start: int | None = None, **kwargs) -> bool:
        """Seed the global counter with a starting offset (only if absent).

        Args:
            start (int | None):
                Starting counter value. Implementations fall back to their
                configured default when None.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the counter was created by this call, False if it already existed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def allocate(self, target: str, **kwargs) -> str:
        """Allocate a new shortcode and bind it to target.

        Args:
            target (str):
                The original long URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str: the newly allocated shortcode.

        Raises:
            CounterUnavailableError:
                If the counter increment failed or returned no usable value.

            ShortURLAlreadyExistsError:
                If the allocated shortcode is already bound.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def resolve(self, shortcode: str, **kwargs) -> str:
        """Return the target URL bound to shortcode.

        Args:
            shortcode (str):
                The shortcode to look up.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str: the target URL, exactly as it was allocated.

        Raises:
            ShortURLNotFoundError:
                If no binding exists for shortcode.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same shortcode already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int | None:
        """Retrieve the current counter value from the data store.

        Returns:
            int | None: The current counter value, None if it was never initialized.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
