"""Sports data service layer.

Routes requests to the feed client, normalizes the responses and caches
standings. API routes call this service - never the client directly.

Transport failures surface here as FeedError and are turned into the
short scoped messages the presentation layer shows.
"""

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date

from quietscores.config import Settings, get_settings
from quietscores.consumers.game_detail import build_game_detail
from quietscores.consumers.ordering import filter_games, live_count
from quietscores.core.exceptions import FeedCancelledError, FeedError, GameNotFoundError
from quietscores.core.interfaces import CancelToken, FeedClient
from quietscores.core.types import Game, GameDetail, StandingsResult, TeamIdentifiers, TeamPage
from quietscores.providers.espn import (
    ESPNClient,
    filter_standings_by_teams,
    game_from_summary_header,
    normalize_scoreboard,
)
from quietscores.providers.espn.constants import SPORT_KEYS, get_sport_path
from quietscores.providers.espn.team import (
    group_roster,
    identifiers_for_team,
    parse_schedule,
    parse_team_conferences,
    parse_team_info,
)
from quietscores.services.requests import RequestTracker
from quietscores.utilities.cache import TTLCache, make_cache_key

logger = logging.getLogger(__name__)

SCORES_UNAVAILABLE = "Unable to load scores"
NO_GAMES = "No games scheduled"
STANDINGS_UNAVAILABLE = "Could not load standings"
DETAIL_UNAVAILABLE = "Unable to load game details"

DETAIL_CHANNEL = "detail"


def create_default_service(settings: Settings | None = None) -> "SportsDataService":
    """Create SportsDataService backed by the ESPN client."""
    settings = settings or get_settings()
    return SportsDataService(client=ESPNClient(settings), settings=settings)


@dataclass
class ScoreboardResult:
    """Games across sports for one date, plus which sports failed."""

    games: list[Game] = field(default_factory=list)
    failed_sports: list[str] = field(default_factory=list)
    message: str | None = None

    @property
    def live_count(self) -> int:
        return live_count(self.games)

    def to_dict(self) -> dict:
        return {
            "games": [game.to_dict() for game in self.games],
            "liveCount": self.live_count,
            "failedSports": self.failed_sports,
            "message": self.message,
        }


class SportsDataService:
    """Service layer for scoreboards, game detail, standings and team pages.

    Standings are cached per sport for settings.standings_ttl_seconds and
    replaced wholesale on refresh. Detail requests are latest-wins: opening
    another game cancels the pending one and its result is discarded.
    """

    def __init__(
        self,
        client: FeedClient,
        settings: Settings | None = None,
        cache: TTLCache | None = None,
    ):
        self._client = client
        self._settings = settings or get_settings()
        self._cache = cache or TTLCache()
        self._tracker = RequestTracker()
        self._detail_lock = threading.Lock()
        self._current_detail: GameDetail | None = None
        self._applied_sequence = 0

    # -------------------------------------------------------------------------
    # Scoreboards
    # -------------------------------------------------------------------------

    def get_scoreboard(
        self, sport: str, target_date: date, cancel: CancelToken | None = None
    ) -> list[Game]:
        """Normalized games for one sport on target_date.

        Raises:
            UnknownSportError: sport is not in the enumeration
            FeedError: the scoreboard could not be fetched
        """
        get_sport_path(sport)
        raw = self._client.get_scoreboard(sport, target_date, cancel)
        return normalize_scoreboard(raw, sport, target_date)

    def fetch_all_scoreboards(
        self,
        target_date: date,
        sports: Iterable[str] | None = None,
        live_only: bool = False,
        cancel: CancelToken | None = None,
    ) -> ScoreboardResult:
        """Fetch several sports concurrently and merge the ones that succeed.

        One sport failing never hides the others. The message is set only
        when every sport failed, or when no games exist at all.

        Raises:
            UnknownSportError: a requested sport is not in the enumeration
            FeedCancelledError: cancel fired; partial results are discarded
        """
        sports = list(sports) if sports is not None else list(SPORT_KEYS)
        for sport in sports:
            get_sport_path(sport)
        if not sports:
            return ScoreboardResult(message=NO_GAMES)

        by_sport: dict[str, list[Game]] = {}
        failed: list[str] = []
        workers = min(len(sports), self._settings.max_workers)

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.get_scoreboard, sport, target_date, cancel): sport
                for sport in sports
            }
            for future in as_completed(futures):
                sport = futures[future]
                try:
                    by_sport[sport] = future.result()
                except FeedError as e:
                    failed.append(sport)
                    logger.warning("[SCORES] %s scoreboard failed: %s", sport, e)

        if cancel is not None:
            cancel.raise_if_cancelled()

        # Merge in request order so ties sort the same way every time
        games = [game for sport in sports for game in by_sport.get(sport, [])]
        failed = [sport for sport in sports if sport in failed]

        message = None
        if len(failed) == len(sports):
            message = SCORES_UNAVAILABLE
        elif not games:
            message = NO_GAMES

        logger.info(
            "[SCORES] %s: %d games from %d sports (%d failed)",
            target_date.isoformat(),
            len(games),
            len(sports) - len(failed),
            len(failed),
        )
        return ScoreboardResult(
            games=filter_games(games, live_only=live_only),
            failed_sports=failed,
            message=message,
        )

    # -------------------------------------------------------------------------
    # Game detail
    # -------------------------------------------------------------------------

    def get_game_detail(
        self,
        sport: str,
        event_id: str,
        game: Game | None = None,
        cancel: CancelToken | None = None,
    ) -> GameDetail:
        """Fetch a summary and build the detail for one game.

        When the scoreboard game is not supplied it is rebuilt from the
        summary header.

        Raises:
            FeedError: the summary could not be fetched
            GameNotFoundError: the summary has no usable game header
        """
        get_sport_path(sport)
        summary = self._client.get_summary(sport, event_id, cancel)
        if game is None:
            game = game_from_summary_header(summary, sport)
            if game is None:
                raise GameNotFoundError(sport, event_id)
        return build_game_detail(summary, game)

    def open_game_detail(
        self, sport: str, event_id: str, game: Game | None = None
    ) -> GameDetail | None:
        """Latest-wins detail fetch.

        Returns None when a newer open_game_detail call superseded this one;
        the stale result is dropped and current_detail is left untouched.
        """
        ticket = self._tracker.begin(DETAIL_CHANNEL)
        try:
            detail = self.get_game_detail(sport, event_id, game, cancel=ticket.cancel)
        except FeedCancelledError:
            logger.debug("[DETAIL] Request for %s/%s cancelled", sport, event_id)
            return None

        with self._detail_lock:
            if not self._tracker.is_current(ticket) or ticket.sequence < self._applied_sequence:
                logger.debug("[DETAIL] Discarding stale result for %s/%s", sport, event_id)
                return None
            self._applied_sequence = ticket.sequence
            self._current_detail = detail
        return detail

    @property
    def current_detail(self) -> GameDetail | None:
        with self._detail_lock:
            return self._current_detail

    def close_game_detail(self) -> None:
        self._tracker.cancel(DETAIL_CHANNEL)
        with self._detail_lock:
            self._current_detail = None

    # -------------------------------------------------------------------------
    # Standings
    # -------------------------------------------------------------------------

    def get_standings(self, sport: str, cancel: CancelToken | None = None) -> dict:
        """Raw standings document, cached per sport.

        Raises:
            FeedError: not cached and the fetch failed
        """
        get_sport_path(sport)
        cache_key = make_cache_key("standings", sport)
        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("[STANDINGS] Cache hit: %s", cache_key)
            return cached

        document = self._client.get_standings(sport, cancel)
        self._cache.set(cache_key, document, ttl=self._settings.standings_ttl_seconds)
        return document

    def get_filtered_standings(
        self,
        sport: str,
        identifiers: TeamIdentifiers,
        cancel: CancelToken | None = None,
    ) -> StandingsResult | None:
        """Groups containing any of the identified teams."""
        return filter_standings_by_teams(self.get_standings(sport, cancel), identifiers)

    def get_game_standings(self, game: Game) -> StandingsResult | None:
        return self.get_filtered_standings(game.sport, TeamIdentifiers.from_game(game))

    def get_conferences(self, sport: str) -> dict[str, str]:
        """Team name/id -> conference name; {} when the teams feed is unavailable."""
        cache_key = make_cache_key("conferences", sport)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached
        raw = self._client.get_teams(sport)
        if raw is None:
            return {}
        conferences = parse_team_conferences(raw)
        self._cache.set(cache_key, conferences, ttl=self._settings.standings_ttl_seconds)
        return conferences

    # -------------------------------------------------------------------------
    # Team page
    # -------------------------------------------------------------------------

    def get_team_page(
        self,
        sport: str,
        team_id: str,
        name: str | None = None,
        abbreviation: str | None = None,
    ) -> TeamPage:
        """Team info, roster, schedule and standings, fetched concurrently.

        Every section is best-effort; a standings failure only sets
        standings_message.
        """
        get_sport_path(sport)
        team_id = str(team_id)

        with ThreadPoolExecutor(max_workers=5) as executor:
            info_future = executor.submit(self._client.get_team, sport, team_id)
            roster_future = executor.submit(self._client.get_roster, sport, team_id)
            schedule_future = executor.submit(self._client.get_team_schedule, sport, team_id)
            standings_future = executor.submit(self.get_standings, sport)
            conferences_future = executor.submit(self.get_conferences, sport)

            raw_info = info_future.result()
            raw_roster = roster_future.result()
            raw_schedule = schedule_future.result()
            conferences = conferences_future.result()

            standings = None
            standings_message = None
            try:
                raw_standings = standings_future.result()
            except FeedError as e:
                logger.warning("[TEAMS] Standings unavailable for %s: %s", sport, e)
                standings_message = STANDINGS_UNAVAILABLE
            else:
                identifiers = identifiers_for_team(team_id, raw_info, name, abbreviation)
                standings = filter_standings_by_teams(raw_standings, identifiers)
                if standings is None:
                    standings_message = STANDINGS_UNAVAILABLE

        profile = parse_team_info(raw_info)
        conference = conferences.get(team_id)
        if conference is None and profile is not None:
            conference = conferences.get(profile.name)

        return TeamPage(
            sport=sport,
            team_id=team_id,
            profile=profile,
            conference=conference,
            roster=tuple(group_roster(raw_roster)),
            schedule=tuple(parse_schedule(raw_schedule, team_id)),
            standings=standings,
            standings_message=standings_message,
        )

    def cache_stats(self) -> dict:
        return self._cache.stats()

    def close(self) -> None:
        close = getattr(self._client, "close", None)
        if callable(close):
            close()
