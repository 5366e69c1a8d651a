"""
Infrastructure package for easydb.

Centralizes database connectivity (driver lookup, pool opening, pooled
handles, transactions). Routing between master and slave lives in
`easydb.registry`, not here.
"""

from easydb.infrastructure.db_factory import (
    SUPPORTED_DRIVERS,
    open_pool,
    redact_dsn,
    resolve_driver,
)
from easydb.infrastructure.handle import PoolHandle
from easydb.infrastructure.transaction import Transaction

__all__ = [
    "SUPPORTED_DRIVERS",
    "PoolHandle",
    "Transaction",
    "open_pool",
    "redact_dsn",
    "resolve_driver",
]
