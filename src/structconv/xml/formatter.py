"""XML pretty-printing and minification."""
from __future__ import annotations

import re
from typing import List, Tuple, Union
from xml.dom.minidom import Element
from xml.sax.saxutils import escape as _escape

from structconv.constants import ATTRIBUTE_ENTITIES, XML_INDENT
from structconv.logging_setup import get_logger
from structconv.xml.parser import (
    attributes_of,
    extract_declaration,
    parse_xml,
    significant_children,
)

log = get_logger(__name__)

_BETWEEN_TAGS_RE = re.compile(r">\s+<")


def minify_xml(text: str) -> str:
    """Drop whitespace between tags. Purely textual; never validates."""
    return _BETWEEN_TAGS_RE.sub("><", text or "").strip()


def _opening(element: Element) -> str:
    attrs = "".join(
        f' {name}="{_escape(value, ATTRIBUTE_ENTITIES)}"'
        for name, value in attributes_of(element)
    )
    return f"<{element.tagName}{attrs}"


def format_xml(text: str, indent: int = XML_INDENT) -> str:
    """Re-render well-formed XML with one element or text run per line.

    - attributes stay on the opening tag
    - an element whose content is one text run is written on one line
    - an element without content is self-closing
    - any other element puts each child on its own, deeper-indented line

    A leading ``<?xml ... ?>`` declaration is kept verbatim as the first
    line. Comments and processing instructions are not reproduced.

    Raises:
        ParseFailure: if the text is not well-formed XML.
    """
    document = parse_xml(text)
    lines: List[str] = []
    declaration = extract_declaration(text)
    if declaration:
        lines.append(declaration)

    pad = " " * indent
    # Each entry is a finished line or an element still to render, with depth.
    work: List[Tuple[Union[str, Element], int]] = [(document.documentElement, 0)]
    while work:
        item, depth = work.pop()
        prefix = pad * depth
        if isinstance(item, str):
            lines.append(prefix + item)
            continue
        opening = _opening(item)
        children = significant_children(item)
        if not children:
            lines.append(f"{prefix}{opening} />")
        elif len(children) == 1 and isinstance(children[0], str):
            lines.append(
                f"{prefix}{opening}>{_escape(children[0])}</{item.tagName}>"
            )
        else:
            lines.append(f"{prefix}{opening}>")
            work.append((f"</{item.tagName}>", depth))
            for child in reversed(children):
                if isinstance(child, str):
                    work.append((_escape(child), depth + 1))
                else:
                    work.append((child, depth + 1))

    log.debug("Formatted XML", lines=len(lines))
    return "\n".join(lines)
