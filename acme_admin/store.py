"""In-memory storage for users and teams."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Mapping, Optional

import anyio

from .models import DEFAULT_ROLE, Team, User, UserStatus
from .seed import seed_teams, seed_users

logger = logging.getLogger("acme_admin.store")

DEFAULT_LATENCY = 0.01

UPDATABLE_USER_FIELDS = ("email", "name", "role", "status")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdAllocator:
    """Chooses the identifier for a newly created record."""

    def allocate(self, existing_ids: Iterable[str]) -> str:
        raise NotImplementedError


class SequentialIdAllocator(IdAllocator):
    """Allocate ``max(existing) + 1``; identifiers must be decimal integers."""

    def allocate(self, existing_ids: Iterable[str]) -> str:
        highest = max((int(value) for value in existing_ids), default=0)
        return str(highest + 1)


class UuidIdAllocator(IdAllocator):
    """Allocate random hex identifiers independent of existing records."""

    def allocate(self, existing_ids: Iterable[str]) -> str:
        return uuid.uuid4().hex


class Store:
    """Owns every user and team record for a single application instance.

    Each operation sleeps for ``latency`` seconds before touching the
    collections so callers always go through an awaitable interface.
    Lookups that find nothing return ``None`` rather than raising. Returned
    records are copies; mutate them through the store methods only.
    """

    def __init__(
        self,
        users: Iterable[User] | None = None,
        teams: Iterable[Team] | None = None,
        *,
        latency: float = DEFAULT_LATENCY,
        id_allocator: IdAllocator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if latency < 0:
            raise ValueError("latency must not be negative")
        self._initial_users = [user.copy() for user in (seed_users() if users is None else users)]
        self._initial_teams = [team.copy() for team in (seed_teams() if teams is None else teams)]
        self._users: List[User] = []
        self._teams: List[Team] = []
        self._latency = latency
        self._ids = id_allocator or SequentialIdAllocator()
        self._clock = clock
        self._lock = anyio.Lock()
        self._restore()

    @property
    def latency(self) -> float:
        return self._latency

    async def _delay(self) -> None:
        await anyio.sleep(self._latency)

    def _restore(self) -> None:
        self._users = [user.copy() for user in self._initial_users]
        self._teams = [team.copy() for team in self._initial_teams]

    def _user(self, user_id: str) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def _team(self, team_id: str) -> Optional[Team]:
        for team in self._teams:
            if team.id == team_id:
                return team
        return None

    def _user_by_email(self, email: str) -> Optional[User]:
        for user in self._users:
            if user.email == email:
                return user
        return None

    def _insert_user(self, email: str, name: str, role: Optional[str]) -> User:
        now = self._clock()
        user = User(
            id=self._ids.allocate(user.id for user in self._users),
            email=email,
            name=name,
            role=role or DEFAULT_ROLE,
            status=UserStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )
        self._users.append(user)
        logger.info("Created user %s <%s>", user.id, user.email)
        return user.copy()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    async def find_user(self, user_id: str) -> Optional[User]:
        await self._delay()
        user = self._user(user_id)
        return user.copy() if user else None

    async def find_user_by_email(self, email: str) -> Optional[User]:
        await self._delay()
        user = self._user_by_email(email)
        return user.copy() if user else None

    async def get_all_users(self) -> List[User]:
        await self._delay()
        return [user.copy() for user in self._users]

    async def create_user(self, email: str, name: str, role: Optional[str] = None) -> User:
        """Insert a user without checking for an existing email."""

        await self._delay()
        return self._insert_user(email, name, role)

    async def register_user(self, email: str, name: str, role: Optional[str] = None) -> Optional[User]:
        """Create a user unless the email is already taken.

        The duplicate check and the insert run under one lock, so two
        concurrent registrations for the same address cannot both succeed.
        Returns ``None`` when the email already exists.
        """

        async with self._lock:
            await self._delay()
            if self._user_by_email(email) is not None:
                return None
            return self._insert_user(email, name, role)

    async def update_user(self, user_id: str, updates: Mapping[str, object]) -> Optional[User]:
        await self._delay()
        user = self._user(user_id)
        if user is None:
            return None
        for key in UPDATABLE_USER_FIELDS:
            value = updates.get(key)
            if value is not None:
                setattr(user, key, value)
        user.updated_at = self._clock()
        return user.copy()

    async def delete_user(self, user_id: str) -> Optional[User]:
        """Soft-delete: the record stays, marked inactive."""

        await self._delay()
        user = self._user(user_id)
        if user is None:
            return None
        user.status = UserStatus.INACTIVE.value
        user.updated_at = self._clock()
        logger.info("Deactivated user %s", user.id)
        return user.copy()

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    async def find_team(self, team_id: str) -> Optional[Team]:
        await self._delay()
        team = self._team(team_id)
        return team.copy() if team else None

    async def get_all_teams(self) -> List[Team]:
        await self._delay()
        return [team.copy() for team in self._teams]

    async def get_team_members(self, team_id: str) -> Optional[List[Optional[User]]]:
        """Resolve a team's member IDs; unknown IDs come back as ``None``."""

        await self._delay()
        team = self._team(team_id)
        if team is None:
            return None
        members: List[Optional[User]] = []
        for member_id in team.members:
            user = self._user(member_id)
            members.append(user.copy() if user else None)
        return members

    async def create_team(self, name: str) -> Team:
        await self._delay()
        now = self._clock()
        team = Team(
            id=self._ids.allocate(team.id for team in self._teams),
            name=name,
            members=[],
            created_at=now,
            updated_at=now,
        )
        self._teams.append(team)
        logger.info("Created team %s (%s)", team.id, team.name)
        return team.copy()

    async def add_team_member(self, team_id: str, user_id: str) -> Optional[Team]:
        await self._delay()
        team = self._team(team_id)
        user = self._user(user_id)
        if team is None or user is None:
            return None
        if user_id not in team.members:
            team.members.append(user_id)
            team.updated_at = self._clock()
            logger.debug("Added user %s to team %s", user_id, team_id)
        return team.copy()

    async def remove_team_member(self, team_id: str, user_id: str) -> Optional[Team]:
        await self._delay()
        team = self._team(team_id)
        if team is None:
            return None
        team.members = [member for member in team.members if member != user_id]
        team.updated_at = self._clock()
        logger.debug("Removed user %s from team %s", user_id, team_id)
        return team.copy()

    def reset_to_seed(self) -> None:
        """Discard every change and restore the records the store started with."""

        self._restore()

    def counts(self) -> Dict[str, int]:
        return {"users": len(self._users), "teams": len(self._teams)}


__all__ = [
    "DEFAULT_LATENCY",
    "IdAllocator",
    "SequentialIdAllocator",
    "Store",
    "UPDATABLE_USER_FIELDS",
    "UuidIdAllocator",
]
