"""
Exception hierarchy for easydb.

Only conditions detected by easydb itself are modelled here. Errors raised by
psycopg or psycopg_pool (connection failures, SQL errors, constraint
violations, pool timeouts) propagate to the caller unchanged.
"""

from __future__ import annotations


class EasyDBError(Exception):
    """Base class for errors raised by easydb."""


class NoConnectionError(EasyDBError):
    """No pool is registered for the requested purpose."""

    def __init__(self, message: str = "No connection to database") -> None:
        super().__init__(message)


class WrongModeError(EasyDBError, ValueError):
    """An instance was requested with a role other than master or slave."""

    def __init__(self, mode: object = None) -> None:
        message = "Wrong mode for NewInstance"
        if mode is not None:
            message = f"{message}: {mode!r} (expected 'master' or 'slave')"
        super().__init__(message)
        self.mode = mode


class WrongInstanceError(EasyDBError):
    """A write-class operation was issued against a slave instance."""

    def __init__(
        self,
        message: str = "Wrong instance selected. Slave instances do not support write ops",
    ) -> None:
        super().__init__(message)


class NoRowsError(EasyDBError):
    """A single-row fetch produced no rows."""

    def __init__(self, message: str = "no rows in result set") -> None:
        super().__init__(message)


class UnknownDriverError(EasyDBError, ValueError):
    """The driver name does not map to a supported client library."""

    def __init__(self, driver: str, supported: tuple[str, ...] = ()) -> None:
        message = f"Unknown driver '{driver}'"
        if supported:
            message += f". Available: {', '.join(supported)}"
        super().__init__(message)
        self.driver = driver


class MissingParameterError(EasyDBError, KeyError):
    """A `:name` placeholder has no matching key in the named-execution argument."""

    def __init__(self, name: str) -> None:
        super().__init__(f"could not find name '{name}' in argument")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class TransactionClosedError(EasyDBError):
    """The transaction was already committed or rolled back."""

    def __init__(
        self, message: str = "transaction has already been committed or rolled back"
    ) -> None:
        super().__init__(message)


__all__ = [
    "EasyDBError",
    "MissingParameterError",
    "NoConnectionError",
    "NoRowsError",
    "TransactionClosedError",
    "UnknownDriverError",
    "WrongInstanceError",
    "WrongModeError",
]
