"""Admin API for managing Acme users and teams."""

from __future__ import annotations

from typing import Any

from .store import IdAllocator, SequentialIdAllocator, Store, UuidIdAllocator


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the admin API application."""

    from .api import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "IdAllocator",
    "SequentialIdAllocator",
    "Store",
    "UuidIdAllocator",
    "create_app",
]
