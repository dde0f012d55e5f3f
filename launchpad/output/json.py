"""
JSON output for --json and the `call` command

Operation results are plain dicts of JSON types already; orjson covers
dataclasses, enums and datetimes natively. Paths are the one extra type
that reaches here.
"""

import os
from typing import Any

import orjson


def _default(obj: Any) -> Any:
    if isinstance(obj, os.PathLike):
        return os.fspath(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps(data: Any, compact: bool = False) -> str:
    """Serialize to a JSON string (pretty unless compact)."""
    option = 0 if compact else orjson.OPT_INDENT_2
    return orjson.dumps(data, default=_default, option=option).decode("utf-8")
