"""Domain records held by the in-memory store."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List


class UserStatus(str, Enum):
    """Lifecycle states a user account can be in."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


DEFAULT_ROLE = "developer"


@dataclass
class User:
    """A user account managed through the admin dashboard."""

    id: str
    email: str
    name: str
    role: str
    status: str
    created_at: datetime
    updated_at: datetime

    def copy(self) -> "User":
        return replace(self)


@dataclass
class Team:
    """A named group of users; membership is tracked by user ID."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    members: List[str] = field(default_factory=list)

    def copy(self) -> "Team":
        return replace(self, members=list(self.members))


__all__ = ["DEFAULT_ROLE", "Team", "User", "UserStatus"]
