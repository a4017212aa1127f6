"""JSON codec backed by the standard library."""
from __future__ import annotations

import datetime
import json
from typing import Any

from structconv.constants import JSON_INDENT
from structconv.errors import EncodingFailure, ParseFailure


def _default(value: Any) -> Any:
    # dates and times come from the YAML and TOML loaders
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as e:
        raise ParseFailure(str(e), fmt="json") from e


def dump_json(value: Any, indent: int | None = JSON_INDENT) -> str:
    separators = None if indent is not None else (",", ":")
    try:
        return json.dumps(
            value,
            indent=indent,
            separators=separators,
            ensure_ascii=False,
            default=_default,
        )
    except (TypeError, ValueError) as e:
        raise EncodingFailure(str(e)) from e


def is_valid_json(text: str) -> bool:
    try:
        load_json(text)
    except ParseFailure:
        return False
    return True


def format_json(text: str, indent: int = JSON_INDENT) -> str:
    return dump_json(load_json(text), indent=indent)


def minify_json(text: str) -> str:
    return dump_json(load_json(text), indent=None)
