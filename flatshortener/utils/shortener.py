"""Shortcode generation utility

This module converts the store's monotonically increasing counter into short
alphanumeric codes and back. Codes are plain base62 numerals over the
alphabet 0-9, a-z, A-Z (in that digit order), so the mapping is a bijection
between non-negative integers and canonical numerals (no leading zeros).

Functions:
    encode(n) -> str:
        Base62 representation of a non-negative integer.
    decode(s) -> int:
        Integer value of a base62 numeral.
    generate_shortcode(counter) -> str:
        Shortcode assigned to the given counter value.

Example:
    >>> from flatshortener.utils import generate_shortcode
    >>> generate_shortcode(1)
    '1'
    >>> generate_shortcode(62)
    '10'
    >>> decode('Z')
    61
"""

from flatshortener.constants import ALPHABET


BASE = len(ALPHABET)
INDEX = {char: value for value, char in enumerate(ALPHABET)}


def encode(n: int) -> str:
    """Encode a non-negative integer as a base62 numeral.

    Args:
        n (int):
            Non-negative integer to encode.

    Returns:
        str: Base62 numeral, most significant digit first. `encode(0)` is '0'.

    Raises:
        TypeError: If `n` is not an integer.
        ValueError: If `n` is negative.

    Example:
        >>> encode(125)
        '21'
    """
    # bool is an int subclass but never a meaningful counter
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(n)}).')
    if n < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {n}).')

    if n == 0:
        return ALPHABET[0]

    digits = []
    while n > 0:
        n, remainder = divmod(n, BASE)
        digits.append(ALPHABET[remainder])
    return ''.join(reversed(digits))


def decode(s: str) -> int:
    """Decode a base62 numeral back into its integer value.

    Raises:
        TypeError: If `s` is not a string.
        ValueError: If `s` is empty or contains characters outside the alphabet.
    """
    if not isinstance(s, str):
        raise TypeError(f'Shortcode must be of type string (given type: {type(s)}).')
    if not s:
        raise ValueError('Shortcode must be a non-empty string.')

    n = 0
    for char in s:
        try:
            n = n * BASE + INDEX[char]
        except KeyError:
            raise ValueError(f"Invalid base62 character {char!r} in shortcode '{s}'.") from None
    return n


def generate_shortcode(counter: int) -> str:
    """Return the shortcode for a store counter value.

    Example:
        >>> generate_shortcode(12345)
        '3d7'
    """
    return encode(counter)
