from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        created_at (datetime):
            Moment (UTC) at which the mapping was created.
        visits (int):
            Number of times the short URL has been resolved.
        last_visited (datetime | None):
            Moment (UTC) of the most recent visit. None until the first visit.

    Example:
        >>> from datetime import datetime, UTC
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="abc123",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> url.visits
        0
        >>> url.last_visited is None
        True
        >>> url.visited(datetime.now(UTC)).visits
        1
    """

    target: str
    shortcode: str
    created_at: datetime
    visits: int = 0
    last_visited: datetime | None = None

    def visited(self, when: datetime) -> 'ShortURLModel':
        """Return a copy of this mapping with one more visit recorded at `when`."""
        return replace(self, visits=self.visits + 1, last_visited=when)
