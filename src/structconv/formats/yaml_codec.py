"""YAML codec backed by PyYAML's safe loader and dumper."""
from __future__ import annotations

from typing import Any

import yaml

from structconv.errors import EncodingFailure, ParseFailure

# Keep flow-style output on one line however long it gets.
_NO_WRAP = 1 << 30


def load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseFailure(str(e), fmt="yaml") from e


def dump_yaml(value: Any, indent: int = 2) -> str:
    try:
        return yaml.safe_dump(
            value, indent=indent, sort_keys=False, allow_unicode=True
        )
    except yaml.YAMLError as e:
        raise EncodingFailure(str(e)) from e


def is_valid_yaml(text: str) -> bool:
    try:
        load_yaml(text)
    except ParseFailure:
        return False
    return True


def format_yaml(text: str) -> str:
    return dump_yaml(load_yaml(text))


def minify_yaml(text: str) -> str:
    """Re-emit the document in flow style on a single line."""
    value = load_yaml(text)
    try:
        flow = yaml.safe_dump(
            value,
            default_flow_style=True,
            sort_keys=False,
            allow_unicode=True,
            width=_NO_WRAP,
        )
    except yaml.YAMLError as e:
        raise EncodingFailure(str(e)) from e
    return flow.replace("\n", " ").strip()
