"""structconv - validate, format, minify and convert structured text formats."""

from __future__ import annotations

from structconv.convert import Converter, Mode, beautify, convert, minify, validate
from structconv.errors import (
    EncodingFailure,
    ParseFailure,
    StructconvError,
    UnsupportedConversion,
)
from structconv.xml import format_xml, is_valid_xml, json_to_xml, minify_xml, xml_to_json

__version__: str = "0.1.0"
__all__: list[str] = [
    "Converter",
    "EncodingFailure",
    "Mode",
    "ParseFailure",
    "StructconvError",
    "UnsupportedConversion",
    "beautify",
    "convert",
    "format_xml",
    "is_valid_xml",
    "json_to_xml",
    "minify",
    "minify_xml",
    "validate",
    "xml_to_json",
]
