"""TOML codec: ``tomllib`` reads, ``tomli_w`` writes.

TOML is line-oriented, so minifying returns the normalized formatted
document rather than squeezing it onto fewer lines.
"""
from __future__ import annotations

import tomllib
from typing import Any

import tomli_w

from structconv.errors import EncodingFailure, ParseFailure


def load_toml(text: str) -> dict:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParseFailure(str(e), fmt="toml") from e


def dump_toml(value: Any) -> str:
    if not isinstance(value, dict):
        raise EncodingFailure(
            f"A TOML document must be a table, not {type(value).__name__}"
        )
    try:
        return tomli_w.dumps(value)
    except TypeError as e:
        # tomli_w has no representation for null
        raise EncodingFailure(f"Cannot write TOML: {e}") from e


def is_valid_toml(text: str) -> bool:
    try:
        load_toml(text)
    except ParseFailure:
        return False
    return True


def format_toml(text: str) -> str:
    return dump_toml(load_toml(text))


def minify_toml(text: str) -> str:
    return format_toml(text)
