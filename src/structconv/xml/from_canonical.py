"""
from_canonical.py

Canonical value -> XML text, the inverse of ``to_canonical``. Also accepts
hand-written JSON-compatible data that never came from XML.

Rules per (value, element name):

- ``None``            -> ``<name />``
- scalar              -> ``<name>value</name>``
- list                -> one ``<name>`` sibling per item (no wrapper)
- dict                -> '@' keys become attributes, '#text' becomes inline
                         text, every other key becomes child elements

Text and attribute values are written verbatim unless ``escape=True``;
with the default, values containing ``<``, ``>`` or ``&`` produce XML that
does not parse back.
"""
from __future__ import annotations

import datetime
import re
from typing import Any, List, Tuple, Union
from xml.sax.saxutils import escape as _escape

from structconv.constants import (
    ATTRIBUTE_ENTITIES,
    ATTRIBUTE_PREFIX,
    DEFAULT_ITEM_TAG,
    DEFAULT_ROOT_TAG,
    TEXT_KEY,
    XML_DECLARATION,
)
from structconv.errors import EncodingFailure
from structconv.logging_setup import get_logger

log = get_logger(__name__)

# A name starts with a letter, '_' or ':'; digits, '-' and '.' may follow.
_NAME_RE = re.compile(r"^(?:[^\W\d]|:)[\w.:-]*$")

# Pending output: literal markup, or a value still to be rendered under a name.
_Work = Union[str, Tuple[Any, str]]


def _scalar_text(value: Any) -> str:
    # bool before int: bool subclasses int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise EncodingFailure(
        f"Cannot represent a value of type {type(value).__name__} in XML"
    )


def _key_name(key: Any) -> str:
    # YAML allows non-string mapping keys
    return key if isinstance(key, str) else _scalar_text(key)


def _check_name(name: str) -> str:
    if not _NAME_RE.match(name):
        raise EncodingFailure(f"Cannot use {name!r} as an XML name")
    return name


def _text(value: Any, escape: bool) -> str:
    text = _scalar_text(value)
    return _escape(text) if escape else text


def _attribute(name: str, value: Any, escape: bool) -> str:
    _check_name(name)
    if value is None:
        text = ""
    elif isinstance(value, (dict, list)):
        raise EncodingFailure(f"Attribute {name!r} must have a scalar value")
    else:
        text = _scalar_text(value)
        if escape:
            text = _escape(text, ATTRIBUTE_ENTITIES)
    return f' {name}="{text}"'


def _text_runs(value: Any, escape: bool) -> List[str]:
    runs = value if isinstance(value, list) else [value]
    out = []
    for run in runs:
        if run is None:
            continue
        if isinstance(run, (dict, list)):
            raise EncodingFailure(f"{TEXT_KEY!r} must hold text or a list of text")
        out.append(_text(run, escape))
    return out


def _elements(value: Any, name: str) -> List[Tuple[Any, str]]:
    """Expand ``value`` into the (value, name) pairs of sibling elements."""
    out: List[Tuple[Any, str]] = []
    pending = [value]
    while pending:
        item = pending.pop()
        if isinstance(item, list):
            pending.extend(reversed(item))
        else:
            out.append((item, name))
    return out


def _expand_object(obj: dict, name: str, escape: bool) -> List[_Work]:
    attributes: List[str] = []
    texts: List[str] = []
    elements: List[Tuple[Any, str]] = []
    for key, value in obj.items():
        key = _key_name(key)
        if key == TEXT_KEY:
            texts = _text_runs(value, escape)
        elif key.startswith(ATTRIBUTE_PREFIX):
            attributes.append(_attribute(key[len(ATTRIBUTE_PREFIX):], value, escape))
        else:
            elements.extend(_elements(value, key))

    opening = f"<{name}{''.join(attributes)}"
    if not elements and not texts:
        return [f"{opening} />"]
    if not elements:
        return [f"{opening}>{''.join(texts)}</{name}>"]

    # Text runs go between elements so that each stays a separate run.
    work: List[_Work] = [f"{opening}>"]
    for i, element in enumerate(elements):
        if i < len(texts):
            work.append(texts[i])
        work.append(element)
    work.extend(texts[len(elements):])
    work.append(f"</{name}>")
    return work


def _render(value: Any, name: str, escape: bool) -> str:
    out: List[str] = []
    work: List[_Work] = [(value, name)]
    while work:
        item = work.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        value, name = item
        if isinstance(value, list):
            work.extend((v, name) for v in reversed(value))
            continue
        _check_name(name)
        if value is None:
            out.append(f"<{name} />")
        elif isinstance(value, dict):
            work.extend(reversed(_expand_object(value, name, escape)))
        else:
            out.append(f"<{name}>{_text(value, escape)}</{name}>")
    return "".join(out)


def _names_root(value: Any) -> bool:
    if not isinstance(value, dict) or len(value) != 1:
        return False
    ((key, inner),) = value.items()
    key = _key_name(key)
    return (
        key != TEXT_KEY
        and not key.startswith(ATTRIBUTE_PREFIX)
        and not isinstance(inner, list)
    )


def json_to_xml(
    value: Any,
    root_tag: str = DEFAULT_ROOT_TAG,
    *,
    escape: bool = False,
    item_tag: str = DEFAULT_ITEM_TAG,
) -> str:
    """Serialize a canonical (or any JSON-compatible) value as XML text.

    A dict with a single element key names the document root; anything
    else is wrapped in ``root_tag``. A top-level list becomes one
    ``item_tag`` element per item inside ``root_tag``.

    Raises:
        EncodingFailure: if a value or key cannot be written as XML.
    """
    if _names_root(value):
        ((key, inner),) = value.items()
        body = _render(inner, _key_name(key), escape)
    elif isinstance(value, list):
        body = _render({item_tag: value}, root_tag, escape)
    else:
        body = _render(value, root_tag, escape)
    log.debug("Converted canonical value to XML", chars=len(body), escape=escape)
    return f"{XML_DECLARATION}\n{body}"
