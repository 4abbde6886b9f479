"""Scoreboard endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from quietscores.api.dependencies import get_service
from quietscores.consumers.display import (
    abbreviate_network,
    fallback_text,
    format_moneyline,
    format_spread,
    get_winner,
    has_possession,
    status_badge,
)
from quietscores.core.types import Game
from quietscores.services import SportsDataService
from quietscores.services.sports_data import SCORES_UNAVAILABLE
from quietscores.utilities.tz import today_local

router = APIRouter()


def _card(game: Game) -> dict:
    """Game record plus the display fields a scoreboard card needs."""
    data = game.to_dict()
    odds = game.odds
    data["display"] = {
        "badge": status_badge(game),
        "winner": get_winner(game) if game.status == "final" else None,
        "network": abbreviate_network(game.broadcast_channel),
        "awayFallback": fallback_text(game.away),
        "homeFallback": fallback_text(game.home),
        "awayPossession": has_possession(game, "away"),
        "homePossession": has_possession(game, "home"),
        "awaySpread": format_spread(odds.away_spread) if odds else "",
        "homeSpread": format_spread(odds.home_spread) if odds else "",
        "awayMoneyline": format_moneyline(odds.away_moneyline) if odds else "",
        "homeMoneyline": format_moneyline(odds.home_moneyline) if odds else "",
    }
    return data


@router.get("/scores")
def get_scores(
    target_date: date | None = Query(default=None, alias="date"),
    sport: str = "all",
    live_only: bool = False,
    service: SportsDataService = Depends(get_service),
) -> dict:
    """Games for a date across one or all sports, live first."""
    sports = None if sport == "all" else [sport]
    result = service.fetch_all_scoreboards(
        target_date or today_local(), sports=sports, live_only=live_only
    )
    if result.message == SCORES_UNAVAILABLE:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=SCORES_UNAVAILABLE,
        )

    data = result.to_dict()
    data["games"] = [_card(game) for game in result.games]
    return data
