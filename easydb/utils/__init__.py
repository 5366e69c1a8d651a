"""
Utilities package for easydb.

Exports shared helpers for logging and SQL text handling. Keep this package
free of connection or pool state.
"""

from easydb.utils.logging import configure_logging, get_logger
from easydb.utils.sql import compile_named_query, condition, named_params

__all__ = [
    "configure_logging",
    "get_logger",
    "compile_named_query",
    "condition",
    "named_params",
]
