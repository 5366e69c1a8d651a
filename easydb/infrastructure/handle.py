"""
Pool handles.

A PoolHandle wraps one psycopg ConnectionPool and borrows a connection for
each call. It is what the registry stores for master and slave, and what an
Instance holds.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from psycopg import Connection
from psycopg_pool import ConnectionPool

from easydb.infrastructure.base import AbstractExecutor
from easydb.infrastructure.db_factory import open_pool, redact_dsn
from easydb.infrastructure.transaction import Transaction
from easydb.utils.logging import get_logger

log = get_logger(__name__)


class PoolHandle(AbstractExecutor):
    """
    Thin pass-through over a ConnectionPool.

    Thread safety is whatever psycopg_pool provides; the handle adds no state
    of its own beyond the pool reference.
    """

    def __init__(self, pool: ConnectionPool, *, driver: str = "postgres", dsn: str = "") -> None:
        self._pool = pool
        self.driver = driver
        self._dsn = dsn

    @classmethod
    def open(cls, driver: str, dsn: str, *, name: Optional[str] = None, **pool_options: Any) -> "PoolHandle":
        """
        Open a pool for ``dsn`` and wrap it.

        ``pool_options`` are forwarded to `open_pool` (min_size, max_size, timeout).
        """
        pool = open_pool(driver, dsn, name=name, **pool_options)
        return cls(pool, driver=driver, dsn=dsn)

    @property
    def pool(self) -> ConnectionPool:
        return self._pool

    @property
    def closed(self) -> bool:
        return bool(self._pool.closed)

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        with self._pool.connection() as conn:
            yield conn

    def begin(self) -> Transaction:
        """
        Check out a connection and open a transaction on it.

        The caller must commit or roll back; until then the connection is not
        returned to the pool.
        """
        conn = self._pool.getconn()
        log.debug("Transaction started", extra={"pool": self._pool.name})
        return Transaction(self._pool, conn)

    def ping(self) -> None:
        """Round-trip a trivial query; raises the client's error on failure."""
        with self._connection() as conn:
            conn.execute("SELECT 1")

    def close(self) -> None:
        if self.closed:
            return
        self._pool.close()
        log.debug("Pool closed", extra={"pool": self._pool.name})

    def __enter__(self) -> "PoolHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"PoolHandle(driver={self.driver!r}, dsn={redact_dsn(self._dsn)!r})"


__all__ = ["PoolHandle"]
