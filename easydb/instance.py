"""
Role-bound database instances.

An Instance owns one pool and a role fixed at construction. Master instances
allow everything; slave instances allow reads and reject `query`,
`execute`, `named_execute` and `begin` with WrongInstanceError before any I/O.
"""

from __future__ import annotations

from typing import Any, ContextManager, Iterator, List, Optional, Union

from easydb.domain.models import ExecResult, Role
from easydb.errors import WrongInstanceError, WrongModeError
from easydb.infrastructure.handle import PoolHandle
from easydb.infrastructure.transaction import Transaction
from easydb.utils.logging import get_logger

log = get_logger(__name__)


def _coerce_role(mode: Union[Role, str]) -> Role:
    try:
        return Role(mode)
    except ValueError:
        raise WrongModeError(mode) from None


class Instance:
    """A pool handle with an immutable master/slave role."""

    __slots__ = ("_handle", "_role")

    def __init__(self, handle: PoolHandle, role: Union[Role, str]) -> None:
        self._role = _coerce_role(role)
        self._handle = handle

    @classmethod
    def connect(
        cls, driver: str, dsn: str, role: Union[Role, str], **pool_options: Any
    ) -> "Instance":
        """
        Validate ``role`` and then open a pool for ``dsn``.

        Raises
        ------
        WrongModeError
            If ``role`` is not master or slave. No connection is attempted.
        """
        resolved = _coerce_role(role)
        handle = PoolHandle.open(driver, dsn, name=f"easydb-instance-{resolved.value}", **pool_options)
        return cls(handle, resolved)

    @property
    def role(self) -> Role:
        return self._role

    @property
    def handle(self) -> PoolHandle:
        return self._handle

    def _require_master(self, operation: str) -> PoolHandle:
        if not self._role.writable:
            log.warning(
                "Rejected %s on slave instance", operation, extra={"operation": operation}
            )
            raise WrongInstanceError()
        return self._handle

    def get(self, query: str, *args: Any, model: Optional[type] = None) -> Any:
        return self._handle.get(query, *args, model=model)

    def select(self, query: str, *args: Any, model: Optional[type] = None) -> List[Any]:
        return self._handle.select(query, *args, model=model)

    def query(
        self, query: str, *args: Any, model: Optional[type] = None
    ) -> ContextManager[Iterator[Any]]:
        return self._require_master("query").query(query, *args, model=model)

    def named_execute(self, query: str, arg: Any) -> ExecResult:
        return self._require_master("named_execute").named_execute(query, arg)

    def execute(self, query: str, *args: Any) -> ExecResult:
        return self._require_master("execute").execute(query, *args)

    def begin(self) -> Transaction:
        return self._require_master("begin").begin()

    def ping(self) -> None:
        self._handle.ping()

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> "Instance":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Instance(role={self._role.value!r}, handle={self._handle!r})"


def new_instance(driver: str, dsn: str, mode: Union[Role, str], **pool_options: Any) -> Instance:
    """Shorthand for `Instance.connect`."""
    return Instance.connect(driver, dsn, mode, **pool_options)


__all__ = ["Instance", "new_instance"]
