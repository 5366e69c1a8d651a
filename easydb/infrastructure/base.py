"""
Shared statement helpers for anything that can hand out a psycopg connection.

PoolHandle borrows a connection from its pool per call; Transaction reuses the
one connection it holds. Both implement `_connection()` and inherit the
read/write helpers below.
"""

from __future__ import annotations

import abc
from contextlib import contextmanager
from typing import Any, ContextManager, Iterator, List, Optional, Sequence

from psycopg import Connection
from psycopg.rows import dict_row

from easydb.domain.models import ExecResult
from easydb.errors import NoRowsError
from easydb.utils.sql import compile_named_query, named_params


def _params(args: Sequence[Any]) -> Optional[Sequence[Any]]:
    # None keeps psycopg from interpreting `%` in parameterless queries.
    return tuple(args) if args else None


def _bind(row: Any, model: Optional[type]) -> Any:
    if model is None:
        return row
    return model(**row)


class AbstractExecutor(abc.ABC):
    """
    Read and write helpers over a connection source.

    Rows come back as dicts unless ``model`` is given, in which case each row
    is passed to ``model(**row)`` (pydantic models and dataclasses both work).
    """

    @abc.abstractmethod
    def _connection(self) -> ContextManager[Connection]:  # pragma: no cover - interface only
        """Yield a connection for the duration of one call."""
        raise NotImplementedError

    def get(self, query: str, *args: Any, model: Optional[type] = None) -> Any:
        """
        Fetch exactly one row.

        Raises
        ------
        NoRowsError
            If the query returns no rows.
        """
        with self._connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, _params(args))
                row = cur.fetchone()
        if row is None:
            raise NoRowsError()
        return _bind(row, model)

    def select(self, query: str, *args: Any, model: Optional[type] = None) -> List[Any]:
        """Fetch all rows."""
        with self._connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, _params(args))
                rows = cur.fetchall()
        return [_bind(row, model) for row in rows]

    @contextmanager
    def query(
        self, query: str, *args: Any, model: Optional[type] = None
    ) -> Iterator[Iterator[Any]]:
        """
        Run a query and yield a lazy iterator over its rows.

        The connection stays checked out until the block exits.

        Example
        -------
            with handle.query("SELECT id FROM users WHERE active = %s", True) as rows:
                for row in rows:
                    ...
        """
        with self._connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, _params(args))
                yield (_bind(row, model) for row in cur)

    def execute(self, query: str, *args: Any) -> ExecResult:
        """Run a statement with positional parameters."""
        with self._connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, _params(args))
                return ExecResult(rows_affected=cur.rowcount, status=cur.statusmessage)

    def named_execute(self, query: str, arg: Any) -> ExecResult:
        """
        Run a statement with ``:name`` placeholders.

        ``arg`` is a mapping, pydantic model, or dataclass. A list or tuple of
        those runs the statement once per item; ``rows_affected`` is then the
        total across all items.

        Raises
        ------
        MissingParameterError
            If a placeholder has no value in ``arg``. Raised before any I/O.
        """
        compiled, names = compile_named_query(query)
        if isinstance(arg, (list, tuple)):
            batch = [named_params(item, names) for item in arg]
        else:
            params = named_params(arg, names)
        with self._connection() as conn:
            with conn.cursor() as cur:
                if isinstance(arg, (list, tuple)):
                    cur.executemany(compiled, batch)
                else:
                    cur.execute(compiled, params)
                return ExecResult(rows_affected=cur.rowcount, status=cur.statusmessage)


__all__ = ["AbstractExecutor"]
