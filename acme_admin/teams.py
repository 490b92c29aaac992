"""Team and team membership endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, status
from pydantic import BaseModel, Field

from .errors import NotFoundError
from .models import Team
from .store import Store
from .users import CamelModel, UserResponse, user_to_response
from .validation import json_body, parse_payload, require_fields


class TeamResponse(CamelModel):
    id: str
    name: str
    members: List[str]
    created_at: datetime
    updated_at: datetime


class CreateTeamRequest(BaseModel):
    name: str


class AddMemberRequest(BaseModel):
    user_id: str = Field(alias="userId")


def team_to_response(team: Team) -> TeamResponse:
    return TeamResponse(
        id=team.id,
        name=team.name,
        members=list(team.members),
        created_at=team.created_at,
        updated_at=team.updated_at,
    )


def register_team_routes(app: FastAPI, store: Store) -> None:
    """Mount the ``/api/teams`` resource on ``app``."""

    router = APIRouter(prefix="/api/teams", tags=["teams"])

    @router.get("", response_model=List[TeamResponse])
    async def list_teams() -> List[TeamResponse]:
        teams = await store.get_all_teams()
        return [team_to_response(team) for team in teams]

    @router.get("/{team_id}", response_model=TeamResponse)
    async def read_team(team_id: str) -> TeamResponse:
        team = await store.find_team(team_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team_to_response(team)

    @router.get("/{team_id}/members", response_model=List[Optional[UserResponse]])
    async def list_team_members(
        team_id: str,
        include_unresolved: bool = Query(default=False, alias="includeUnresolved"),
    ) -> List[Optional[UserResponse]]:
        members = await store.get_team_members(team_id)
        if members is None:
            raise NotFoundError("Team not found")
        # Soft-deleted users still resolve; only IDs with no record at all are dropped.
        if not include_unresolved:
            members = [member for member in members if member is not None]
        return [user_to_response(member) if member else None for member in members]

    @router.post(
        "",
        response_model=TeamResponse,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_fields("name"))],
    )
    async def create_team(body: Dict[str, Any] = Depends(json_body)) -> TeamResponse:
        payload = parse_payload(CreateTeamRequest, body)
        team = await store.create_team(payload.name)
        return team_to_response(team)

    @router.post(
        "/{team_id}/members",
        response_model=TeamResponse,
        dependencies=[Depends(require_fields("userId"))],
    )
    async def add_team_member(team_id: str, body: Dict[str, Any] = Depends(json_body)) -> TeamResponse:
        payload = parse_payload(AddMemberRequest, body)
        team = await store.add_team_member(team_id, payload.user_id)
        if team is None:
            raise NotFoundError("Team or user not found")
        return team_to_response(team)

    @router.delete("/{team_id}/members/{user_id}", response_model=TeamResponse)
    async def remove_team_member(team_id: str, user_id: str) -> TeamResponse:
        team = await store.remove_team_member(team_id, user_id)
        if team is None:
            raise NotFoundError("Team not found")
        return team_to_response(team)

    app.include_router(router)


__all__ = ["TeamResponse", "register_team_routes", "team_to_response"]
