"""Unit tests for the ShortURLModel dataclass in short_url_model.py.

This test suite verifies the integrity, immutability, and equality behavior
of the ShortURLModel, which represents a shortened URL mapping with its
visit counters.

Test coverage includes:

1. Model creation and defaults
   - Ensures instances can be created with valid values.
   - Verifies that visits defaults to 0 and last_visited to None.

2. Equality semantics
   - Confirms that models with identical data compare equal.

3. Immutability
   - Verifies that fields can't be reassigned after object creation.

4. Recording visits
   - visited() returns an updated copy and leaves the original untouched.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, UTC

import pytest

from flatshortener.models.short_url_model import ShortURLModel


CREATED_AT = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def short_url():
    return ShortURLModel(target='https://example.com/article/123', shortcode='abc123', created_at=CREATED_AT)


# -------------------------------------------------
# 1. Model creation and defaults
# -------------------------------------------------


def test_valid_short_url_model_creation(short_url):
    """Ensure ShortURLModel can be created with valid data and defaults."""
    assert short_url.target == 'https://example.com/article/123'
    assert short_url.shortcode == 'abc123'
    assert short_url.created_at == CREATED_AT
    assert short_url.visits == 0
    assert short_url.last_visited is None


# -------------------------------------------------
# 2. Equality semantics
# -------------------------------------------------


def test_equal_models(short_url):
    other = ShortURLModel(target='https://example.com/article/123', shortcode='abc123', created_at=CREATED_AT)
    assert short_url == other


@pytest.mark.parametrize(
    'changes',
    [
        {'target': 'https://example.com/other'},
        {'shortcode': 'xyz789'},
        {'visits': 3},
        {'last_visited': CREATED_AT},
    ],
)
def test_unequal_models(short_url, changes):
    fields = {'target': short_url.target, 'shortcode': short_url.shortcode, 'created_at': CREATED_AT}
    assert short_url != ShortURLModel(**(fields | changes))


# -------------------------------------------------
# 3. Immutability
# -------------------------------------------------


@pytest.mark.parametrize('field, value', [('target', 'https://x.y/'), ('shortcode', 'x'), ('visits', 9)])
def test_model_is_frozen(short_url, field, value):
    with pytest.raises(FrozenInstanceError):
        setattr(short_url, field, value)


# -------------------------------------------------
# 4. Recording visits
# -------------------------------------------------


def test_visited_returns_updated_copy(short_url):
    first = CREATED_AT + timedelta(minutes=5)
    second = CREATED_AT + timedelta(minutes=10)

    once = short_url.visited(first)
    twice = once.visited(second)

    assert short_url.visits == 0
    assert short_url.last_visited is None
    assert once.visits == 1
    assert once.last_visited == first
    assert twice.visits == 2
    assert twice.last_visited == second
    assert twice.created_at == CREATED_AT
