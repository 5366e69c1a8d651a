"""
Module-level query API routed through a Registry.

Reads (`get`, `select`, `query`) prefer the slave; writes and transactions
(`execute`, `named_execute`, `begin`) always use the master. Each function
raises NoConnectionError when the chosen handle is missing and otherwise
delegates to the handle unchanged.
"""

from __future__ import annotations

from typing import Any, ContextManager, Iterator, List, Optional

from easydb.domain.models import ExecResult, Purpose
from easydb.errors import NoConnectionError
from easydb.infrastructure.handle import PoolHandle
from easydb.infrastructure.transaction import Transaction
from easydb.registry import Registry, default_registry
from easydb.utils.sql import condition


def _resolve(purpose: Purpose, registry: Optional[Registry]) -> PoolHandle:
    handle = (registry or default_registry()).choose_connection(purpose)
    if handle is None:
        raise NoConnectionError()
    return handle


def get(
    query: str, *args: Any, model: Optional[type] = None, registry: Optional[Registry] = None
) -> Any:
    """Fetch one row; raises NoRowsError when there is none."""
    return _resolve(Purpose.SELECT, registry).get(query, *args, model=model)


def select(
    query: str, *args: Any, model: Optional[type] = None, registry: Optional[Registry] = None
) -> List[Any]:
    """Fetch all rows."""
    return _resolve(Purpose.SELECT, registry).select(query, *args, model=model)


def query(
    query: str, *args: Any, model: Optional[type] = None, registry: Optional[Registry] = None
) -> ContextManager[Iterator[Any]]:
    """
    Return a context manager yielding a lazy row iterator.

    The handle is resolved immediately, so a missing connection raises here
    rather than on entering the block.
    """
    return _resolve(Purpose.SELECT, registry).query(query, *args, model=model)


def named_execute(query: str, arg: Any, registry: Optional[Registry] = None) -> ExecResult:
    """Run a statement with ``:name`` placeholders on the master."""
    return _resolve(Purpose.UPDATE, registry).named_execute(query, arg)


def execute(query: str, *args: Any, registry: Optional[Registry] = None) -> ExecResult:
    """Run a statement with positional parameters on the master."""
    return _resolve(Purpose.UPDATE, registry).execute(query, *args)


def begin(registry: Optional[Registry] = None) -> Transaction:
    """Open a transaction on the master."""
    return _resolve(Purpose.UPDATE, registry).begin()


__all__ = ["begin", "condition", "execute", "get", "named_execute", "query", "select"]
