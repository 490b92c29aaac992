"""Summary statistics over the user and team collections."""
from __future__ import annotations

from typing import Dict, Iterable

from fastapi import FastAPI

from .models import Team, User, UserStatus
from .store import Store
from .users import CamelModel


class UserStats(CamelModel):
    total: int
    active: int
    inactive: int
    pending: int
    by_role: Dict[str, int]


class TeamStats(CamelModel):
    total: int
    total_memberships: int


class StatsResponse(CamelModel):
    users: UserStats
    teams: TeamStats


def summarize(users: Iterable[User], teams: Iterable[Team]) -> StatsResponse:
    status_counts = {state.value: 0 for state in UserStatus}
    by_role: Dict[str, int] = {}
    total_users = 0
    for user in users:
        total_users += 1
        if user.status in status_counts:
            status_counts[user.status] += 1
        by_role[user.role] = by_role.get(user.role, 0) + 1

    total_teams = 0
    memberships = 0
    for team in teams:
        total_teams += 1
        memberships += len(team.members)

    return StatsResponse(
        users=UserStats(
            total=total_users,
            active=status_counts[UserStatus.ACTIVE.value],
            inactive=status_counts[UserStatus.INACTIVE.value],
            pending=status_counts[UserStatus.PENDING.value],
            by_role=by_role,
        ),
        teams=TeamStats(total=total_teams, total_memberships=memberships),
    )


def register_stats_routes(app: FastAPI, store: Store) -> None:
    @app.get("/api/stats", response_model=StatsResponse, tags=["stats"])
    async def read_stats() -> StatsResponse:
        users = await store.get_all_users()
        teams = await store.get_all_teams()
        return summarize(users, teams)


__all__ = ["StatsResponse", "register_stats_routes", "summarize"]
