"""
SQL text helpers.

These functions are plain string transformations. They do not parse SQL, so
placeholders inside string literals or comments are rewritten like any other
text.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Tuple

from pydantic import BaseModel

from easydb.errors import MissingParameterError

CONDITION_PLACEHOLDER = "/*condition*/"

# `:name`, but not the second half of a `::type` cast or a `word:name` token.
_NAMED_PARAM = re.compile(r"(?<![:\w]):([A-Za-z_]\w*)")


def condition(query: str, condition: str) -> str:
    """
    Replace every ``/*condition*/`` token in ``query`` with ``condition``.

    The condition text is inserted verbatim; callers are responsible for
    keeping user input out of it.
    """
    return query.replace(CONDITION_PLACEHOLDER, condition)


def compile_named_query(query: str) -> Tuple[str, List[str]]:
    """
    Rewrite ``:name`` placeholders into psycopg ``%(name)s`` placeholders.

    Literal ``%`` characters are doubled so the driver does not treat them as
    placeholders.

    Returns
    -------
    tuple[str, list[str]]
        The compiled query and the parameter names in order of appearance.
    """
    names: List[str] = []

    def _replace(match: re.Match[str]) -> str:
        names.append(match.group(1))
        return f"%({match.group(1)})s"

    compiled = _NAMED_PARAM.sub(_replace, query.replace("%", "%%"))
    return compiled, names


def named_params(arg: Any, names: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Turn a named-execution argument into a parameter mapping.

    Accepts a mapping, a pydantic model, or a dataclass instance. Every entry
    of ``names`` must be present in the result.

    Raises
    ------
    MissingParameterError
        If a name from ``names`` is not provided by ``arg``.
    """
    if isinstance(arg, Mapping):
        params = dict(arg)
    elif isinstance(arg, BaseModel):
        params = arg.model_dump()
    elif dataclasses.is_dataclass(arg) and not isinstance(arg, type):
        params = {field.name: getattr(arg, field.name) for field in dataclasses.fields(arg)}
    else:
        raise TypeError(
            f"named parameters must be a mapping, pydantic model or dataclass, got {type(arg).__name__}"
        )
    for name in names:
        if name not in params:
            raise MissingParameterError(name)
    return params


__all__ = ["CONDITION_PLACEHOLDER", "compile_named_query", "condition", "named_params"]
