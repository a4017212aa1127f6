"""
to_canonical.py

XML -> canonical value. The canonical value is plain JSON-compatible data
(dict / list / str) built with these conventions:

- XML attributes become keys prefixed with '@' (e.g. attribute 'id' -> '@id')
- Text runs are stored under '#text'; a second run turns it into a list
- Child elements become keys named after their tag; a repeated tag turns
  the value into a list on its second occurrence
- An element without attributes whose only content is one text run is
  the bare string, not an object
- An element with neither attributes nor content is ``{}``
- Values are never coerced: numbers and booleans stay strings

The walk uses an explicit stack, so deeply nested documents do not hit the
interpreter recursion limit.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple, Union
from xml.dom.minidom import Element

from structconv.constants import ATTRIBUTE_PREFIX, TEXT_KEY
from structconv.logging_setup import get_logger
from structconv.xml.accumulator import ABSENT, Slot, materialize, widen
from structconv.xml.parser import Child, attributes_of, parse_xml, significant_children

log = get_logger(__name__)


class _Frame:
    """An element whose children are still being converted."""

    __slots__ = ("tag", "attributes", "slots", "children")

    def __init__(
        self, tag: str, attributes: List[Tuple[str, str]], children: List[Child]
    ):
        self.tag = tag
        self.attributes = attributes
        self.slots: Dict[str, Slot] = {}
        self.children: Iterator[Child] = iter(children)

    def add(self, key: str, value: Any) -> None:
        self.slots[key] = widen(self.slots.get(key, ABSENT), value)

    def finish(self) -> Dict[str, Any]:
        node: Dict[str, Any] = {}
        for name, value in self.attributes:
            node[f"{ATTRIBUTE_PREFIX}{name}"] = value
        for key, slot in self.slots.items():
            node[key] = materialize(slot)
        return node


def _start(element: Element) -> Union[str, _Frame]:
    attributes = attributes_of(element)
    children = significant_children(element)
    if not attributes and len(children) == 1 and isinstance(children[0], str):
        return children[0]
    return _Frame(element.tagName, attributes, children)


def element_to_canonical(element: Element) -> Any:
    """Convert a DOM element into its canonical value."""
    started = _start(element)
    if not isinstance(started, _Frame):
        return started

    stack: List[_Frame] = [started]
    while True:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is None:
            stack.pop()
            value = frame.finish()
            if not stack:
                return value
            stack[-1].add(frame.tag, value)
        elif isinstance(child, str):
            frame.add(TEXT_KEY, child)
        else:
            nested = _start(child)
            if isinstance(nested, _Frame):
                stack.append(nested)
            else:
                frame.add(child.tagName, nested)


def xml_to_json(text: str) -> Dict[str, Any]:
    """Parse XML text and return ``{root_tag: canonical value}``.

    Raises:
        ParseFailure: if the text is not well-formed XML.
    """
    root = parse_xml(text).documentElement
    result = {root.tagName: element_to_canonical(root)}
    log.debug("Converted XML to canonical value", root=root.tagName, chars=len(text))
    return result
