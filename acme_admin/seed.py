"""Fixture records the store starts from and resets to."""

from __future__ import annotations

from datetime import datetime
from typing import List, Tuple

from .models import Team, User


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


_SEED_USERS: Tuple[Tuple[str, str, str, str, str, str, str], ...] = (
    ("1", "alice@acme.com", "Alice Chen", "admin", "active", "2024-01-15T08:00:00Z", "2024-01-15T08:00:00Z"),
    ("2", "bob@acme.com", "Bob Smith", "developer", "active", "2024-01-16T09:30:00Z", "2024-02-01T14:00:00Z"),
    ("3", "carol@acme.com", "Carol Jones", "developer", "active", "2024-01-20T11:00:00Z", "2024-01-20T11:00:00Z"),
    ("4", "david@acme.com", "David Park", "designer", "active", "2024-02-01T10:00:00Z", "2024-02-01T10:00:00Z"),
    ("5", "eve@acme.com", "Eve Martinez", "developer", "active", "2024-02-05T13:00:00Z", "2024-03-10T09:00:00Z"),
    ("6", "frank@acme.com", "Frank Wilson", "product_manager", "active", "2024-02-10T08:30:00Z", "2024-02-10T08:30:00Z"),
    ("7", "grace@acme.com", "Grace Lee", "developer", "inactive", "2024-01-10T07:00:00Z", "2024-03-15T16:00:00Z"),
    ("8", "henry@acme.com", "Henry Taylor", "developer", "pending", "2024-03-20T12:00:00Z", "2024-03-20T12:00:00Z"),
)

_SEED_TEAMS: Tuple[Tuple[str, str, Tuple[str, ...], str, str], ...] = (
    ("1", "Engineering", ("1", "2", "3", "5"), "2024-01-15T08:00:00Z", "2024-02-05T13:00:00Z"),
    ("2", "Product", ("6",), "2024-01-15T08:00:00Z", "2024-02-10T08:30:00Z"),
    ("3", "Design", ("4",), "2024-01-20T11:00:00Z", "2024-02-01T10:00:00Z"),
    ("4", "Infrastructure", ("1", "2"), "2024-02-01T10:00:00Z", "2024-02-01T14:00:00Z"),
)


def seed_users() -> List[User]:
    """Return fresh copies of the seed users."""

    return [
        User(
            id=user_id,
            email=email,
            name=name,
            role=role,
            status=status,
            created_at=_ts(created),
            updated_at=_ts(updated),
        )
        for user_id, email, name, role, status, created, updated in _SEED_USERS
    ]


def seed_teams() -> List[Team]:
    """Return fresh copies of the seed teams."""

    return [
        Team(
            id=team_id,
            name=name,
            members=list(members),
            created_at=_ts(created),
            updated_at=_ts(updated),
        )
        for team_id, name, members, created, updated in _SEED_TEAMS
    ]


__all__ = ["seed_teams", "seed_users"]
