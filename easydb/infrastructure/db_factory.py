"""
Database pool factory for easydb.

Maps driver names to the client library and opens psycopg connection pools.
Opening blocks until the pool holds its minimum number of connections; a pool
with no minimum is pinged instead. Either way a bad DSN or unreachable server
fails at connect time rather than on first use.

No retry is attempted; psycopg_pool errors (e.g. PoolTimeout) reach the caller
as raised.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg.conninfo import conninfo_to_dict, make_conninfo
from psycopg_pool import ConnectionPool

from easydb.config import get_settings
from easydb.errors import UnknownDriverError
from easydb.utils.logging import get_logger

log = get_logger(__name__)

SUPPORTED_DRIVERS: tuple[str, ...] = ("postgres", "postgresql", "psycopg")


def resolve_driver(driver: str) -> str:
    """
    Normalize a driver name, raising UnknownDriverError if unsupported.
    """
    normalized = (driver or "").strip().lower()
    if normalized not in SUPPORTED_DRIVERS:
        raise UnknownDriverError(driver, SUPPORTED_DRIVERS)
    return normalized


def redact_dsn(dsn: str) -> str:
    """
    Return the DSN with its password masked, suitable for logs and CLI output.
    """
    try:
        params = conninfo_to_dict(dsn)
    except psycopg.ProgrammingError:
        return "<invalid dsn>"
    if "password" in params:
        params["password"] = "***"
    return make_conninfo("", **params)


def open_pool(
    driver: str,
    dsn: str,
    *,
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
    timeout: Optional[float] = None,
    name: Optional[str] = None,
) -> ConnectionPool:
    """
    Open a connection pool and wait for its initial connections.

    Parameters
    ----------
    driver : str
        Driver name; see SUPPORTED_DRIVERS.
    dsn : str
        libpq connection string (URI or key=value form).
    min_size, max_size : int, optional
        Pool bounds. Default to the configured settings.
    timeout : float, optional
        Seconds to wait for the initial connections.
    name : str, optional
        Pool name, shown in psycopg_pool logs.

    Returns
    -------
    ConnectionPool
        An open pool.

    Raises
    ------
    UnknownDriverError
        If the driver is not supported. Raised before any I/O.
    psycopg_pool.PoolTimeout
        If the pool cannot be filled (or pinged, when ``min_size`` is 0)
        within ``timeout``.
    """
    resolve_driver(driver)
    settings = get_settings()
    min_size = settings.db_pool_min_size if min_size is None else min_size
    max_size = settings.db_pool_max_size if max_size is None else max_size
    timeout = settings.db_connect_timeout if timeout is None else timeout

    pool = ConnectionPool(
        conninfo=dsn,
        min_size=min_size,
        max_size=max(min_size, max_size),
        open=False,
        name=name,
    )
    try:
        pool.open(wait=True, timeout=timeout)
        if min_size == 0:
            # An empty pool opens without touching the server.
            with pool.connection(timeout=timeout) as conn:
                conn.execute("SELECT 1")
    except Exception:
        log.warning("Pool failed to open", extra={"pool": name, "dsn": redact_dsn(dsn)})
        pool.close()
        raise

    log.info(
        "Pool opened",
        extra={"pool": name, "dsn": redact_dsn(dsn), "min_size": min_size, "max_size": max_size},
    )
    return pool


__all__ = ["SUPPORTED_DRIVERS", "open_pool", "redact_dsn", "resolve_driver"]
