"""
Domain package for easydb.

Exports the routing enums and result types shared by the registry, the
facade, and instances.
"""

from easydb.domain.models import ExecResult, Purpose, Role

__all__ = [
    "ExecResult",
    "Purpose",
    "Role",
]
