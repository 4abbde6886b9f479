"""Standings endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from quietscores.api.dependencies import get_service
from quietscores.core.exceptions import FeedError
from quietscores.core.types import TeamIdentifiers
from quietscores.providers.espn.standings import parse_standings
from quietscores.services import SportsDataService
from quietscores.services.sports_data import STANDINGS_UNAVAILABLE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/standings")


@router.get("/{sport}")
def get_standings(
    sport: str,
    team_id: list[str] = Query(default=[]),
    name: list[str] = Query(default=[]),
    abbr: list[str] = Query(default=[]),
    service: SportsDataService = Depends(get_service),
) -> dict:
    """Groups holding the given teams, or every group when none are given."""
    identifiers = TeamIdentifiers.build(ids=team_id, names=name, abbreviations=abbr)
    try:
        if identifiers.is_empty:
            groups = parse_standings(service.get_standings(sport))
            return {
                "groups": [group.to_dict() for group in groups],
                "teamIdentifiers": identifiers.to_dict(),
                "isAllGroups": True,
            }
        result = service.get_filtered_standings(sport, identifiers)
    except FeedError as e:
        logger.warning("[API] Standings for %s failed: %s", sport, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=STANDINGS_UNAVAILABLE,
        ) from e

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=STANDINGS_UNAVAILABLE,
        )
    return result.to_dict()
