"""Interfaces consumed by the service layer.

FeedClient is what SportsDataService talks to. ESPNClient implements it;
tests use small stubs.
"""

import threading
from datetime import date
from typing import Protocol, runtime_checkable

from quietscores.core.exceptions import FeedCancelledError


class CancelToken:
    """Abort signal shared between a caller and an in-flight feed request.

    Thread-safe. Once cancelled it stays cancelled.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, url: str | None = None) -> None:
        if self._event.is_set():
            raise FeedCancelledError("Request cancelled", url=url)


@runtime_checkable
class FeedClient(Protocol):
    """Raw feed access.

    get_scoreboard/get_summary/get_standings raise FeedError on failure.
    Team endpoints (team, roster, schedule, teams) are best-effort and
    return None instead.
    """

    def get_scoreboard(
        self, sport: str, target_date: date, cancel: CancelToken | None = None
    ) -> dict: ...

    def get_summary(self, sport: str, event_id: str, cancel: CancelToken | None = None) -> dict: ...

    def get_standings(self, sport: str, cancel: CancelToken | None = None) -> dict: ...

    def get_team(
        self, sport: str, team_id: str, cancel: CancelToken | None = None
    ) -> dict | None: ...

    def get_roster(
        self, sport: str, team_id: str, cancel: CancelToken | None = None
    ) -> dict | None: ...

    def get_team_schedule(
        self, sport: str, team_id: str, cancel: CancelToken | None = None
    ) -> dict | None: ...

    def get_teams(self, sport: str, cancel: CancelToken | None = None) -> dict | None: ...
