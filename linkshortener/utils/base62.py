"""Base62 encoding of counter values

This module converts non-negative integers to and from their positional
base62 representation. The alphabet is ordered digits first, then uppercase,
then lowercase letters:

    0-9  -> positions 0..9
    A-Z  -> positions 10..35
    a-z  -> positions 36..61

Codes are URL-safe, carry no padding and grow by one symbol every time the
value crosses a power of 62.

Functions:
    encode(value: int) -> str
        Encode a non-negative integer as a base62 string.

    decode(code: str) -> int
        Decode a base62 string back into an integer.

Example:
    >>> from linkshortener.utils.base62 import encode, decode
    >>> encode(100001)
    'Q0v'
    >>> decode('Q0v')
    100001
"""

import string


__all__ = ['ALPHABET', 'BASE', 'InvalidSymbolError', 'encode', 'decode']

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)

_POSITIONS = {symbol: position for position, symbol in enumerate(ALPHABET)}


class InvalidSymbolError(ValueError):
    """Raised when a code contains a character outside of the base62 alphabet."""

    def __init__(self, symbol: str, position: int):
        self.symbol = symbol
        self.position = position
        super().__init__(f'Invalid base62 symbol {symbol!r} at position {position}.')


def encode(value: int) -> str:
    """Encode a non-negative integer into its base62 representation.

    The value is repeatedly divided by BASE; each remainder selects one symbol,
    least significant first. The collected symbols are reversed so the most
    significant symbol comes first.

    Args:
        value (int):
            Non-negative integer to encode.

    Returns:
        str: base62 string. Zero is encoded as the first alphabet symbol ('0').

    Raises:
        TypeError:
            If value is not an integer.
        ValueError:
            If value is negative.

    Example:
        >>> encode(1)
        '1'
        >>> encode(61)
        'z'
        >>> encode(62)
        '10'
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f'Value must be of type integer (given type: {type(value)}).')
    if value < 0:
        raise ValueError(f'Value must be a non-negative integer (given value: {value}).')

    if value == 0:
        return ALPHABET[0]

    symbols = []
    while value > 0:
        value, remainder = divmod(value, BASE)
        symbols.append(ALPHABET[remainder])
    return ''.join(reversed(symbols))


def decode(code: str) -> int:
    """Decode a base62 string into the integer it represents.

    Args:
        code (str):
            Non-empty string over the base62 alphabet.

    Returns:
        int: decoded value.

    Raises:
        TypeError:
            If code is not a string.
        ValueError:
            If code is empty.
        InvalidSymbolError:
            If code contains a character outside of the alphabet.

    Example:
        >>> decode('10')
        62
    """
    if not isinstance(code, str):
        raise TypeError(f'Code must be of type string (given type: {type(code)}).')
    if not code:
        raise ValueError('Code must be a non-empty string.')

    value = 0
    for position, symbol in enumerate(code):
        try:
            value = value * BASE + _POSITIONS[symbol]
        except KeyError:
            raise InvalidSymbolError(symbol, position) from None
    return value
