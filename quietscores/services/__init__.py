"""Service layer - the only code that talks to the feed client."""

from quietscores.services.requests import RequestTicket, RequestTracker
from quietscores.services.sports_data import (
    ScoreboardResult,
    SportsDataService,
    create_default_service,
)

__all__ = [
    "RequestTicket",
    "RequestTracker",
    "ScoreboardResult",
    "SportsDataService",
    "create_default_service",
]
