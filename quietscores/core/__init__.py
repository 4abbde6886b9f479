"""Core types and interfaces for quietscores.

All data structures are frozen dataclasses with attribute access.
Feed clients implement the FeedClient interface.
"""

from quietscores.core.exceptions import (
    FeedCancelledError,
    FeedError,
    FeedUnavailableError,
    GameNotFoundError,
    QuietScoresError,
    UnknownSportError,
)
from quietscores.core.interfaces import CancelToken, FeedClient
from quietscores.core.types import (
    GAME_STATUSES,
    CategoryLeader,
    Game,
    GameDetail,
    LeaderCategory,
    Odds,
    PeriodScores,
    RosterGroup,
    ScheduleRow,
    Situation,
    StandingsEntry,
    StandingsGroup,
    StandingsResult,
    StatComparison,
    TeamIdentifiers,
    TeamPage,
    TeamProfile,
    TeamSide,
    WinProbabilityPoint,
)

__all__ = [
    # Types
    "GAME_STATUSES",
    "CategoryLeader",
    "Game",
    "GameDetail",
    "LeaderCategory",
    "Odds",
    "PeriodScores",
    "RosterGroup",
    "ScheduleRow",
    "Situation",
    "StandingsEntry",
    "StandingsGroup",
    "StandingsResult",
    "StatComparison",
    "TeamIdentifiers",
    "TeamPage",
    "TeamProfile",
    "TeamSide",
    "WinProbabilityPoint",
    # Interfaces
    "CancelToken",
    "FeedClient",
    # Errors
    "FeedCancelledError",
    "FeedError",
    "FeedUnavailableError",
    "GameNotFoundError",
    "QuietScoresError",
    "UnknownSportError",
]
