"""
convert.py

Per-mode actions (beautify, minify, validate) and format-to-format
conversion. Every conversion goes through a plain Python value: the source
text is loaded by its codec and the value is dumped by the target codec. For
XML that value is the canonical form produced by ``xml_to_json``.

Example usage:
    from structconv.convert import Converter, Mode
    conv = Converter()
    conv.convert("<a><b>1</b><b>2</b></a>", Mode.XML, Mode.YAML)
    conv.beautify('{"a":1}', Mode.JSON)
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from structconv.errors import ParseFailure, StructconvError, UnsupportedConversion
from structconv.formats import get_codec
from structconv.formats.json_codec import dump_json, format_json
from structconv.jwt import format_jwt, is_valid_jwt
from structconv.logging_setup import get_logger
from structconv.settings import Settings
from structconv.xml import format_xml, json_to_xml

log = get_logger(__name__)


class Mode(str, Enum):
    JSON = "json"
    XML = "xml"
    YAML = "yaml"
    TOML = "toml"
    JWT = "jwt"

    @property
    def extension(self) -> str:
        return "json" if self is Mode.JWT else self.value

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @classmethod
    def from_suffix(cls, suffix: str) -> "Mode":
        """Map a file suffix such as ``.yml`` to a mode."""
        key = suffix.lower().lstrip(".")
        key = {"yml": "yaml", "token": "jwt"}.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedConversion(f"Unknown file type '{suffix}'") from None


_MEDIA_TYPES = {
    Mode.JSON: "application/json",
    Mode.XML: "application/xml",
    Mode.YAML: "text/yaml",
    Mode.JWT: "application/json",
    Mode.TOML: "application/toml",
}


def _mode(value: Mode | str) -> Mode:
    try:
        return Mode(value)
    except ValueError:
        raise UnsupportedConversion(f"Unknown format '{value}'") from None


def _require_input(text: str) -> None:
    if text is None or not text.strip():
        raise ParseFailure("Input is empty")


class Converter:
    """Runs actions and conversions with the options from ``Settings``."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def beautify(self, text: str, mode: Mode) -> str:
        _require_input(text)
        mode = _mode(mode)
        if mode is Mode.JWT:
            return format_jwt(text, indent=self.settings.formatting.json_indent)
        if mode is Mode.JSON:
            return format_json(text, indent=self.settings.formatting.json_indent)
        if mode is Mode.XML:
            return format_xml(text, indent=self.settings.formatting.xml_indent)
        return get_codec(mode.value).format(text)

    def minify(self, text: str, mode: Mode) -> str:
        _require_input(text)
        mode = _mode(mode)
        if mode is Mode.JWT:
            raise UnsupportedConversion("Cannot minify a JWT token")
        return get_codec(mode.value).minify(text)

    def validate(self, text: str, mode: Mode) -> bool:
        """True if ``text`` is valid for ``mode``. Never raises for a known mode."""
        mode = _mode(mode)
        if mode is Mode.JWT:
            return is_valid_jwt(text)
        if not text or not text.strip():
            return False
        return get_codec(mode.value).is_valid(text)

    def parse_input(self, text: str, mode: Mode) -> Any:
        """Load ``text`` into a plain Python value."""
        _require_input(text)
        mode = _mode(mode)
        if mode is Mode.JWT:
            raise UnsupportedConversion("Conversion not supported for this format")
        return get_codec(mode.value).load(text)

    def render_output(
        self,
        value: Any,
        mode: Mode,
        root_tag: str | None = None,
        escape: bool | None = None,
    ) -> str:
        """Serialize a plain Python value in ``mode``.

        ``root_tag`` and ``escape`` only apply to XML output and default to
        the ``xml`` settings.
        """
        mode = _mode(mode)
        if mode is Mode.JWT:
            raise UnsupportedConversion(f"Cannot convert to {mode.value.upper()}")
        if mode is Mode.JSON:
            return dump_json(value, indent=self.settings.formatting.json_indent)
        if mode is Mode.XML:
            xml_cfg = self.settings.xml
            return json_to_xml(
                value,
                xml_cfg.root_tag if root_tag is None else root_tag,
                escape=xml_cfg.escape if escape is None else escape,
                item_tag=xml_cfg.item_tag,
            )
        return get_codec(mode.value).dump(value)

    def convert(
        self,
        text: str,
        source: Mode,
        target: Mode,
        *,
        root_tag: str | None = None,
        escape: bool | None = None,
    ) -> str:
        source, target = _mode(source), _mode(target)
        try:
            value = self.parse_input(text, source)
            result = self.render_output(value, target, root_tag, escape)
        except StructconvError as e:
            log.warning(
                "Conversion failed",
                source=source.value,
                target=target.value,
                error=str(e),
            )
            raise
        log.info(
            "Converted document",
            source=source.value,
            target=target.value,
            chars=len(result),
        )
        return result


def beautify(text: str, mode: Mode) -> str:
    return Converter().beautify(text, mode)


def minify(text: str, mode: Mode) -> str:
    return Converter().minify(text, mode)


def validate(text: str, mode: Mode) -> bool:
    return Converter().validate(text, mode)


def convert(
    text: str,
    source: Mode,
    target: Mode,
    *,
    root_tag: str | None = None,
    escape: bool | None = None,
) -> str:
    """Convert ``text`` from ``source`` to ``target`` with default settings."""
    return Converter().convert(
        text, source, target, root_tag=root_tag, escape=escape
    )
