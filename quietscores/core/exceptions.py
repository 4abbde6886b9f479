"""Exception hierarchy.

Transport problems are raised at the feed client boundary only. The
normalization layer never raises for shape mismatches; it falls back.
"""


class QuietScoresError(Exception):
    """Base class for all quietscores errors."""


class FeedError(QuietScoresError):
    """A feed request did not produce a usable document."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FeedUnavailableError(FeedError):
    """Network failure or non-success response after all retries."""


class FeedCancelledError(FeedError):
    """The request was superseded and aborted through its cancel token."""


class UnknownSportError(QuietScoresError, ValueError):
    """Sport key is not part of the supported enumeration."""

    def __init__(self, sport: str):
        super().__init__(f"Unknown sport: {sport!r}")
        self.sport = sport


class GameNotFoundError(QuietScoresError, LookupError):
    """A summary document did not describe a game that could be built."""

    def __init__(self, sport: str, event_id: str):
        super().__init__(f"No game {event_id!r} for {sport}")
        self.sport = sport
        self.event_id = event_id
