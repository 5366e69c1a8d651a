"""
easydb - master/slave connection helper for PostgreSQL.

Keeps a master (writable) pool and an optional slave (read-only) pool,
routes reads to the slave and writes to the master, and exposes thin
pass-through helpers on top of psycopg:

- `connect_master` / `connect_slave` / `choose_connection`
- `get`, `select`, `query`, `execute`, `named_execute`, `begin`
- `condition` for `/*condition*/` templating
- `Instance` for a single pool with a fixed master/slave role
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from easydb.config import Settings, get_settings
from easydb.domain.models import ExecResult, Purpose, Role
from easydb.errors import (
    EasyDBError,
    MissingParameterError,
    NoConnectionError,
    NoRowsError,
    TransactionClosedError,
    UnknownDriverError,
    WrongInstanceError,
    WrongModeError,
)
from easydb.facade import begin, condition, execute, get, named_execute, query, select
from easydb.infrastructure.handle import PoolHandle
from easydb.infrastructure.transaction import Transaction
from easydb.instance import Instance, new_instance
from easydb.registry import (
    Registry,
    choose_connection,
    connect_from_settings,
    connect_master,
    connect_slave,
    default_registry,
)
from easydb.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Registry and routing
    "Registry",
    "choose_connection",
    "connect_from_settings",
    "connect_master",
    "connect_slave",
    "default_registry",
    # Query facade
    "begin",
    "condition",
    "execute",
    "get",
    "named_execute",
    "query",
    "select",
    # Handles and instances
    "Instance",
    "PoolHandle",
    "Transaction",
    "new_instance",
    # Types
    "ExecResult",
    "Purpose",
    "Role",
    # Errors
    "EasyDBError",
    "MissingParameterError",
    "NoConnectionError",
    "NoRowsError",
    "TransactionClosedError",
    "UnknownDriverError",
    "WrongInstanceError",
    "WrongModeError",
    # Logging
    "configure_logging",
    "get_logger",
]
