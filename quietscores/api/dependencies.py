"""Shared route dependencies."""

from fastapi import Request

from quietscores.services import SportsDataService


def get_service(request: Request) -> SportsDataService:
    return request.app.state.service
