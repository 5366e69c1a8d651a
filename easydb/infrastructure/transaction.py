"""
Caller-owned transactions.

A Transaction holds one connection checked out of a pool. The caller ends it
with `commit()` or `rollback()`; either returns the connection to the pool,
after which the transaction refuses further statements.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from psycopg import Connection
from psycopg_pool import ConnectionPool

from easydb.errors import TransactionClosedError
from easydb.infrastructure.base import AbstractExecutor
from easydb.utils.logging import get_logger

log = get_logger(__name__)


class Transaction(AbstractExecutor):
    """
    A transaction on a single pooled connection.

    Usable as a context manager: commits on a clean exit, rolls back when the
    block raises.

    Example
    -------
        with easydb.begin() as tx:
            tx.execute("UPDATE accounts SET balance = balance - %s WHERE id = %s", 10, 1)
            tx.execute("UPDATE accounts SET balance = balance + %s WHERE id = %s", 10, 2)
    """

    def __init__(self, pool: ConnectionPool, conn: Connection) -> None:
        self._pool = pool
        self._conn: Optional[Connection] = conn
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._conn is None

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        conn = self._conn
        if conn is None:
            raise TransactionClosedError()
        yield conn

    def _release(self) -> Connection:
        with self._lock:
            conn = self._conn
            if conn is None:
                raise TransactionClosedError()
            self._conn = None
            return conn

    def commit(self) -> None:
        conn = self._release()
        try:
            conn.commit()
        finally:
            self._pool.putconn(conn)
        log.debug("Transaction committed")

    def rollback(self) -> None:
        conn = self._release()
        try:
            conn.rollback()
        finally:
            self._pool.putconn(conn)
        log.debug("Transaction rolled back")

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.closed:
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()


__all__ = ["Transaction"]
