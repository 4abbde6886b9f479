"""Build a GameDetail from a summary document and its scoreboard Game.

Each section is extracted independently. A section that fails on an
unexpected shape is logged and left at its default so the rest of the
detail still renders.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from quietscores.consumers.linescores import (
    needs_reconstruction,
    reconstruct_period_scores,
    resolve_period_cells,
)
from quietscores.consumers.situation import resolve_situation
from quietscores.consumers.win_probability import current_win_probability, extract_win_probability
from quietscores.core.types import Game, GameDetail, PeriodScores
from quietscores.providers.espn.constants import FOOTBALL_SPORTS
from quietscores.providers.espn.summary import (
    combined_plays,
    extract_commentary,
    extract_headlines,
    extract_leaders,
    extract_players,
    extract_plays,
    match_boxscore_teams,
    match_header_competitors,
    resolve_linescores,
    score_share,
    stat_comparisons,
)
from quietscores.utilities.parsing import as_dict, dig, id_str, parse_number

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _section(name: str, game: Game, build: Callable[[], T], default: T) -> T:
    try:
        return build()
    except Exception as e:
        logger.warning("[DETAIL] %s failed for game %s: %s", name, game.id, e)
        return default


def _team_id(box_team: dict | None) -> str | None:
    return id_str(dig(box_team, "team", "id"))


def build_game_detail(summary: dict | None, game: Game) -> GameDetail:
    """Enrich a scoreboard game with everything the summary document offers.

    Args:
        summary: Raw summary document (may be partial or None)
        game: The game as last seen on the scoreboard

    Returns:
        GameDetail; never raises for shape problems in summary
    """
    summary = as_dict(summary)

    away_box, home_box = _section(
        "team matching", game, lambda: match_boxscore_teams(summary, game), (None, None)
    )
    away_header, home_header = _section(
        "header matching", game, lambda: match_header_competitors(summary, game), (None, None)
    )
    plays = _section("plays", game, lambda: extract_plays(summary), [])

    def linescores() -> tuple[tuple[str, ...], tuple[str, ...], PeriodScores]:
        away_official = resolve_linescores(summary, away_header, away_box, game.away.id)
        home_official = resolve_linescores(summary, home_header, home_box, game.home.id)
        reconstructed = PeriodScores()
        if needs_reconstruction(away_official, home_official):
            reconstructed = reconstruct_period_scores(
                combined_plays(summary),
                away_total=parse_number(game.away_score),
                home_total=parse_number(game.home_score),
            )
        return (
            resolve_period_cells(away_official, reconstructed.away),
            resolve_period_cells(home_official, reconstructed.home),
            reconstructed,
        )

    empty_cells = ("-",) * 5
    away_cells, home_cells, reconstructed = _section(
        "linescores", game, linescores, (empty_cells, empty_cells, PeriodScores())
    )

    away_share, home_share = score_share(game)

    situation = None
    if game.sport in FOOTBALL_SPORTS and game.status != "scheduled":
        situation = _section(
            "situation",
            game,
            lambda: resolve_situation(summary, game, _team_id(away_box), _team_id(home_box)),
            None,
        )

    win_probability = _section(
        "win probability", game, lambda: extract_win_probability(summary), []
    )
    current = _section(
        "current win probability",
        game,
        lambda: current_win_probability(win_probability, plays),
        None,
    )

    return GameDetail(
        game=game,
        away_team=away_box,
        home_team=home_box,
        plays=tuple(plays),
        leaders=tuple(_section("leaders", game, lambda: extract_leaders(summary), [])),
        headlines=tuple(_section("headlines", game, lambda: extract_headlines(summary), [])),
        commentary=tuple(_section("commentary", game, lambda: extract_commentary(summary), [])),
        away_linescores=away_cells,
        home_linescores=home_cells,
        reconstructed_scores=reconstructed,
        away_players=tuple(_section("players", game, lambda: extract_players(away_box), [])),
        home_players=tuple(_section("players", game, lambda: extract_players(home_box), [])),
        team_stats=tuple(
            _section("team stats", game, lambda: stat_comparisons(away_box, home_box), [])
        ),
        away_score_share=away_share,
        home_score_share=home_share,
        situation=situation,
        win_probability=tuple(win_probability),
        current_win_probability=current,
    )
