"""
parser.py

Hardened XML parsing for the XML core. Every entry point (canonical
conversion, formatting, validation) parses through here, using
``defusedxml.minidom`` so entity declarations and external references are
refused instead of expanded.

The rest of the package only relies on the DOM surface:

- ``element.tagName`` (qualified name as written, e.g. ``ns:item``)
- ``element.attributes.items()`` in document order
- ``element.childNodes`` (elements, text, CDATA, comments, PIs)

``significant_children`` applies the character-data normalization shared
by the canonical walk and the formatter.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple, Union
from xml.dom import Node
from xml.dom.minidom import Document, Element
from xml.parsers.expat import ExpatError

import defusedxml.minidom
from defusedxml import DefusedXmlException

from structconv.errors import ParseFailure
from structconv.logging_setup import get_logger

log = get_logger(__name__)

_DECLARATION_RE = re.compile(r"^\s*(<\?xml\s[^?]*\?>)")

_CHARACTER_DATA = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)

# A significant child is either an element or a trimmed, non-empty text run.
Child = Union[Element, str]


def parse_xml(text: str) -> Document:
    """Parse XML text into a DOM document.

    Raises:
        ParseFailure: if the text is empty or not well-formed, or uses a
            construct the hardened parser refuses (entities, external DTDs).
    """
    if text is None or not text.strip():
        raise ParseFailure("Input is empty", fmt="xml")
    try:
        return defusedxml.minidom.parseString(text)
    except ExpatError as e:
        log.debug("XML parse failed", error=str(e))
        raise ParseFailure(f"Invalid XML: {e}", fmt="xml") from e
    except DefusedXmlException as e:
        log.debug("XML construct refused", error=str(e))
        raise ParseFailure(f"Invalid XML: {e}", fmt="xml") from e


def is_valid_xml(text: str) -> bool:
    """Return True if ``text`` is well-formed XML. Never raises."""
    try:
        parse_xml(text)
    except ParseFailure:
        return False
    return True


def extract_declaration(text: str) -> Optional[str]:
    """Return the leading ``<?xml ... ?>`` declaration verbatim, if any."""
    m = _DECLARATION_RE.match(text or "")
    return m.group(1) if m else None


def attributes_of(element: Element) -> List[Tuple[str, str]]:
    """Attributes of ``element`` as (name, value) pairs in document order."""
    return list(element.attributes.items())


def significant_children(element: Element) -> List[Child]:
    """Normalize the child nodes of ``element``.

    Comments and processing instructions are dropped, adjacent text and
    CDATA nodes are coalesced into one run, runs are trimmed and runs that
    end up empty are discarded. Elements are returned as-is.
    """
    out: List[Child] = []
    pending: List[str] = []

    def flush() -> None:
        if pending:
            run = "".join(pending).strip()
            pending.clear()
            if run:
                out.append(run)

    for node in element.childNodes:
        if node.nodeType in _CHARACTER_DATA:
            pending.append(node.data)
        elif node.nodeType == Node.ELEMENT_NODE:
            flush()
            out.append(node)
    flush()
    return out
