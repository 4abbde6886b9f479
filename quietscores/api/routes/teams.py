"""Team page endpoints."""

from fastapi import APIRouter, Depends

from quietscores.api.dependencies import get_service
from quietscores.services import SportsDataService

router = APIRouter(prefix="/teams")


@router.get("/{sport}/{team_id}")
def get_team(
    sport: str,
    team_id: str,
    name: str | None = None,
    abbr: str | None = None,
    service: SportsDataService = Depends(get_service),
) -> dict:
    """Team profile, roster, schedule and division standings."""
    return service.get_team_page(sport, team_id, name=name, abbreviation=abbr).to_dict()
