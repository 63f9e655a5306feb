"""Unit tests for the base62 helpers in shortener.py.

Test coverage includes:

1. Basic functionality
   - Ensures small counters map onto single alphabet characters.

2. Multi-digit encoding
   - Ensures carries into the next digit follow base62 positional notation.

3. Round trip
   - decode(encode(n)) == n over a range of counters.

4. Injectivity
   - Distinct counters never share a shortcode.

5. Error handling
   - Ensures invalid inputs (negative numbers, non-integers, foreign characters)
     raise appropriate exceptions.

6. Output format
   - All characters in the shortcode must belong to the base62 alphabet.
"""

import string

import pytest

from flatshortener.utils import encode, decode, generate_shortcode


# -------------------------------
# 1. Basic functionality
# -------------------------------


@pytest.mark.parametrize(
    'counter, expected',
    [
        (0, '0'),
        (1, '1'),
        (9, '9'),
        (10, 'a'),
        (35, 'z'),
        (36, 'A'),
        (61, 'Z'),
    ],
)
def test_encode_single_digit(counter, expected):
    """Counters below 62 are encoded as a single character."""
    assert encode(counter) == expected


# -------------------------------
# 2. Multi-digit encoding
# -------------------------------


@pytest.mark.parametrize(
    'counter, expected',
    [
        (62, '10'),
        (63, '11'),
        (125, '21'),
        (3843, 'ZZ'),
        (3844, '100'),
        (12345, '3d7'),
    ],
)
def test_encode_multiple_digits(counter, expected):
    """Ensure larger counters carry into further digits."""
    assert encode(counter) == expected


def test_generate_shortcode_matches_encode():
    """generate_shortcode() is the base62 encoding of the counter."""
    assert generate_shortcode(1) == '1'
    assert generate_shortcode(12345) == encode(12345)


def test_encode_handles_huge_counters():
    """Ensure counters beyond 64 bits are encoded without overflow."""
    counter = 62**20 + 7
    assert len(encode(counter)) == 21
    assert decode(encode(counter)) == counter


# -------------------------------
# 3. Round trip
# -------------------------------


def test_decode_inverts_encode():
    """decode(encode(n)) == n for the first ten thousand counters."""
    for n in range(10_000):
        assert decode(encode(n)) == n


@pytest.mark.parametrize('shortcode, expected', [('0', 0), ('Z', 61), ('10', 62), ('3d7', 12345)])
def test_decode_known_values(shortcode, expected):
    assert decode(shortcode) == expected


# -------------------------------
# 4. Injectivity
# -------------------------------


def test_encode_is_injective():
    """Distinct counters produce distinct shortcodes."""
    codes = [encode(n) for n in range(20_000)]
    assert len(set(codes)) == len(codes)


# -------------------------------
# 5. Error handling
# -------------------------------


@pytest.mark.parametrize('counter', [None, 'abc', 12.34, True])
def test_invalid_counter_type_raises_error(counter):
    """Non-integer counters raise TypeError."""
    with pytest.raises(TypeError):
        encode(counter)


@pytest.mark.parametrize('counter', [-1, -62])
def test_negative_counter_raises_error(counter):
    """Negative counters raise ValueError."""
    with pytest.raises(ValueError, match='non-negative'):
        encode(counter)


@pytest.mark.parametrize('shortcode', ['', 'my-link', 'a b', 'abc@'])
def test_decode_rejects_foreign_characters(shortcode):
    """Strings outside the base62 alphabet can't be decoded."""
    with pytest.raises(ValueError):
        decode(shortcode)


def test_decode_rejects_non_strings():
    with pytest.raises(TypeError):
        decode(42)


# -------------------------------
# 6. Output format
# -------------------------------


def test_encode_uses_base62_alphabet_only():
    """All characters must be letters or digits."""
    allowed = set(string.ascii_letters + string.digits)
    for n in range(0, 1_000_000, 9_973):
        assert set(encode(n)) <= allowed
