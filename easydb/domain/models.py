"""
Domain types for easydb.

Routing purposes and instance roles are closed enumerations. Both subclass
`str` so plain strings compare equal to their members.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Purpose(str, Enum):
    """Intent of a statement, used to pick the master or slave pool."""

    SELECT = "select"
    UPDATE = "update"


class Role(str, Enum):
    """Fixed role of an Instance."""

    MASTER = "master"
    SLAVE = "slave"

    @property
    def writable(self) -> bool:
        return self is Role.MASTER


@dataclass(frozen=True)
class ExecResult:
    """
    Outcome of a write statement.

    Attributes
    ----------
    rows_affected : int
        Rows touched by the statement, or -1 when the server does not report it.
    status : str | None
        Server command status, e.g. ``"INSERT 0 1"``.
    """

    rows_affected: int = -1
    status: Optional[str] = None


__all__ = ["ExecResult", "Purpose", "Role"]
