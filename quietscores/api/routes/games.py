"""Game detail endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from quietscores.api.dependencies import get_service
from quietscores.consumers.detail_view import DetailView
from quietscores.consumers.win_probability import chart_points
from quietscores.core.exceptions import FeedError, GameNotFoundError
from quietscores.services import SportsDataService
from quietscores.services.sports_data import DETAIL_UNAVAILABLE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games")


@router.get("/{sport}/{event_id}")
def get_game(
    sport: str,
    event_id: str,
    tab: str | None = None,
    service: SportsDataService = Depends(get_service),
) -> dict:
    """Full detail for one game, with the view state and tab to show."""
    try:
        detail = service.get_game_detail(sport, event_id)
    except GameNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except FeedError as e:
        logger.warning("[API] Detail for %s/%s failed: %s", sport, event_id, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=DETAIL_UNAVAILABLE,
        ) from e

    view = DetailView.initial(detail.game.status)
    if tab:
        view = view.select_tab(tab)

    data = detail.to_dict()
    data["view"] = view.to_dict()
    data["winProbabilityChart"] = chart_points(list(detail.win_probability))
    return data
