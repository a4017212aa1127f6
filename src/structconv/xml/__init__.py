"""Bidirectional XML <-> canonical value mapping, formatting and validation."""

from structconv.xml.formatter import format_xml, minify_xml
from structconv.xml.from_canonical import json_to_xml
from structconv.xml.parser import is_valid_xml, parse_xml
from structconv.xml.to_canonical import element_to_canonical, xml_to_json

__all__ = [
    "element_to_canonical",
    "format_xml",
    "is_valid_xml",
    "json_to_xml",
    "minify_xml",
    "parse_xml",
    "xml_to_json",
]
