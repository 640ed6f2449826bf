"""Core utilities for the in-memory user directory service."""

from __future__ import annotations

from typing import Any

from .identifiers import next_id
from .models import NewUser, User
from .store import UserStore
from .validators import InvalidDate, TooLong, ValidationError


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the user directory API application."""

    from .service import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "InvalidDate",
    "NewUser",
    "TooLong",
    "User",
    "UserStore",
    "ValidationError",
    "create_app",
    "next_id",
]
