"""
Master/slave pool registry and connection selector.

A Registry holds at most one master and one slave PoolHandle. Reads and writes
of those two references are serialized by a lock; pool I/O happens outside it.

The module keeps a default registry for the module-level API:

    import easydb

    easydb.connect_master("postgres", "postgresql://app@primary/app")
    easydb.connect_slave("postgres", "postgresql://app@replica/app")
    rows = easydb.select("SELECT * FROM users")   # served by the slave
    easydb.execute("DELETE FROM sessions")        # served by the master

Code that prefers explicit wiring can build its own Registry and pass it
around (or to the facade functions via ``registry=``).
"""

from __future__ import annotations

import atexit
import threading
from typing import Any, Optional, Union

from easydb.config import Settings, get_settings
from easydb.domain.models import Purpose, Role
from easydb.infrastructure.handle import PoolHandle
from easydb.utils.logging import get_logger

log = get_logger(__name__)


class Registry:
    """Owns the master and slave pool handles."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._master: Optional[PoolHandle] = None
        self._slave: Optional[PoolHandle] = None

    @property
    def master(self) -> Optional[PoolHandle]:
        with self._lock:
            return self._master

    @property
    def slave(self) -> Optional[PoolHandle]:
        with self._lock:
            return self._slave

    def _install(self, role: Role, handle: Optional[PoolHandle]) -> Optional[PoolHandle]:
        with self._lock:
            if role is Role.MASTER:
                previous, self._master = self._master, handle
            else:
                previous, self._slave = self._slave, handle
        return previous

    def _connect(self, role: Role, driver: str, dsn: str, **pool_options: Any) -> PoolHandle:
        # A failed open leaves the current handle untouched.
        handle = PoolHandle.open(driver, dsn, name=f"easydb-{role.value}", **pool_options)
        previous = self._install(role, handle)
        if previous is not None:
            log.info("Replacing %s pool", role.value, extra={"role": role.value})
            previous.close()
        log.info("Connected %s pool", role.value, extra={"role": role.value, "driver": driver})
        return handle

    def connect_master(self, driver: str, dsn: str, **pool_options: Any) -> PoolHandle:
        """Open a pool and register it as master, closing any previous master."""
        return self._connect(Role.MASTER, driver, dsn, **pool_options)

    def connect_slave(self, driver: str, dsn: str, **pool_options: Any) -> PoolHandle:
        """Open a pool and register it as slave, closing any previous slave."""
        return self._connect(Role.SLAVE, driver, dsn, **pool_options)

    def choose_connection(self, purpose: Union[Purpose, str]) -> Optional[PoolHandle]:
        """
        Pick the handle for ``purpose``.

        Reads go to the slave when one is registered. Everything else, and
        reads without a slave, go to the master, which may be None.
        """
        with self._lock:
            if purpose == Purpose.SELECT and self._slave is not None:
                return self._slave
            return self._master

    def close(self) -> None:
        """
        Close and forget both pools.

        Both are detached first and the master is closed even if closing the
        slave raises; that error still propagates.
        """
        slave = self._install(Role.SLAVE, None)
        master = self._install(Role.MASTER, None)
        try:
            if slave is not None:
                slave.close()
        finally:
            if master is not None:
                master.close()


_default_registry = Registry()
atexit.register(_default_registry.close)


def default_registry() -> Registry:
    """Return the process-wide registry used by the module-level API."""
    return _default_registry


def connect_master(driver: str, dsn: str, **pool_options: Any) -> PoolHandle:
    return _default_registry.connect_master(driver, dsn, **pool_options)


def connect_slave(driver: str, dsn: str, **pool_options: Any) -> PoolHandle:
    return _default_registry.connect_slave(driver, dsn, **pool_options)


def choose_connection(purpose: Union[Purpose, str]) -> Optional[PoolHandle]:
    return _default_registry.choose_connection(purpose)


def connect_from_settings(
    settings: Optional[Settings] = None, registry: Optional[Registry] = None
) -> Registry:
    """
    Connect master and, when configured, slave from settings.

    Raises
    ------
    ValueError
        If no master DSN is configured.
    """
    settings = settings or get_settings()
    registry = registry or _default_registry
    if not settings.db_master_dsn:
        raise ValueError("DB_MASTER_DSN is not configured")

    pool_options = {
        "min_size": settings.db_pool_min_size,
        "max_size": settings.db_pool_max_size,
        "timeout": settings.db_connect_timeout,
    }
    registry.connect_master(settings.db_driver, settings.db_master_dsn, **pool_options)
    if settings.db_slave_dsn:
        registry.connect_slave(settings.db_driver, settings.db_slave_dsn, **pool_options)
    return registry


__all__ = [
    "Registry",
    "choose_connection",
    "connect_from_settings",
    "connect_master",
    "connect_slave",
    "default_registry",
]
