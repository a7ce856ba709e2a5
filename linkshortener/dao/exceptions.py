"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    CounterUnavailableError:
        Raised when the global counter can't be atomically incremented or
        doesn't return a usable value. No short URL is stored in that case.

    ShortURLNotFoundError:
        Raised when a short URL is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to store a short URL whose shortcode is already bound.

Example:
    >>> from linkshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError('Q0v')
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'Q0v' not found.
"""

from linkshortener.exceptions import LinkShortenerError


class DAOError(LinkShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'


class CounterUnavailableError(DataStoreError):
    """Exception raised when the global counter can't be incremented.

    NOTE: the failed increment is never retried. A retry could burn counter
          values without a clear bound, so the retry policy is left to the caller.
    """

    error_code = 'dao:counter_unavailable_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a short URL is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'

    def __init__(self, shortcode: str, message: str | None = None):
        self.shortcode = shortcode
        super().__init__(message or f"Short URL with code '{shortcode}' not found.")


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when attempting to store a short URL that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'

    def __init__(self, shortcode: str, message: str | None = None):
        self.shortcode = shortcode
        super().__init__(message or f"Short URL with code '{shortcode}' already exists.")
