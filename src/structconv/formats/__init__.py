"""Per-format codecs keyed by format name.

Every codec exposes the same five operations so callers can dispatch on a
format name without knowing which library sits behind it:

- ``is_valid(text) -> bool`` never raises
- ``format(text)`` / ``minify(text)`` raise ``ParseFailure`` on bad input
- ``load(text)`` parses into plain Python data
- ``dump(value)`` serializes plain Python data, raising ``EncodingFailure``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from structconv.errors import UnsupportedConversion
from structconv.formats.json_codec import (
    dump_json,
    format_json,
    is_valid_json,
    load_json,
    minify_json,
)
from structconv.formats.toml_codec import (
    dump_toml,
    format_toml,
    is_valid_toml,
    load_toml,
    minify_toml,
)
from structconv.formats.yaml_codec import (
    dump_yaml,
    format_yaml,
    is_valid_yaml,
    load_yaml,
    minify_yaml,
)
from structconv.xml import (
    format_xml,
    is_valid_xml,
    json_to_xml,
    minify_xml,
    xml_to_json,
)


@dataclass(frozen=True)
class FormatCodec:
    name: str
    is_valid: Callable[[str], bool]
    format: Callable[[str], str]
    minify: Callable[[str], str]
    load: Callable[[str], Any]
    dump: Callable[[Any], str]


_CODECS: Dict[str, FormatCodec] = {
    codec.name: codec
    for codec in (
        FormatCodec("json", is_valid_json, format_json, minify_json, load_json, dump_json),
        FormatCodec("xml", is_valid_xml, format_xml, minify_xml, xml_to_json, json_to_xml),
        FormatCodec("yaml", is_valid_yaml, format_yaml, minify_yaml, load_yaml, dump_yaml),
        FormatCodec("toml", is_valid_toml, format_toml, minify_toml, load_toml, dump_toml),
    )
}


def get_codec(name: str) -> FormatCodec:
    """Return the codec registered for ``name``."""
    try:
        return _CODECS[name]
    except KeyError:
        raise UnsupportedConversion(f"No codec for format '{name}'") from None


def codec_names() -> Tuple[str, ...]:
    return tuple(_CODECS)
