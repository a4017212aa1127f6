"""Test XML pretty-printing and minification."""

import pytest

from structconv.errors import ParseFailure
from structconv.xml import format_xml, is_valid_xml, minify_xml, xml_to_json


def test_minify_collapses_whitespace_between_tags():
    assert minify_xml("<a>\n  <b/>\n</a>") == "<a><b/></a>"


def test_minify_trims_and_keeps_text():
    assert minify_xml("  <a> x </a>\n") == "<a> x </a>"


def test_minify_does_not_validate():
    assert minify_xml("<a>\n<b>") == "<a><b>"


def test_format_nested_elements():
    doc = '<a x="1"><b>hi</b><c/><d></d><e><f>2</f></e></a>'
    assert format_xml(doc) == "\n".join(
        [
            '<a x="1">',
            "  <b>hi</b>",
            "  <c />",
            "  <d />",
            "  <e>",
            "    <f>2</f>",
            "  </e>",
            "</a>",
        ]
    )


def test_format_keeps_declaration():
    doc = '<?xml version="1.0" encoding="UTF-8"?>\n<a><b>1</b></a>'
    assert format_xml(doc) == "\n".join(
        ['<?xml version="1.0" encoding="UTF-8"?>', "<a>", "  <b>1</b>", "</a>"]
    )


def test_format_without_declaration_adds_none():
    assert format_xml("<a>hi</a>") == "<a>hi</a>"


def test_format_mixed_content_puts_runs_on_own_lines():
    assert format_xml("<p>Hello <b>world</b> again</p>") == "\n".join(
        ["<p>", "  Hello", "  <b>world</b>", "  again", "</p>"]
    )


def test_format_reescapes_text_and_attributes():
    doc = '<a t="&quot;q&quot; &amp;">1 &lt; 2</a>'
    formatted = format_xml(doc)
    assert formatted == '<a t="&quot;q&quot; &amp;">1 &lt; 2</a>'
    assert is_valid_xml(formatted)


def test_format_custom_indent():
    assert format_xml("<a><b/></a>", indent=4) == "<a>\n    <b />\n</a>"


def test_format_is_idempotent():
    doc = "<r><x a='1'>t</x><y><z/></y></r>"
    once = format_xml(doc)
    assert format_xml(once) == once


def test_format_deep_document():
    depth = 2000
    formatted = format_xml("<a>" * depth + "</a>" * depth)
    lines = formatted.split("\n")
    assert len(lines) == 2 * depth - 1
    assert lines[depth - 1] == "  " * (depth - 1) + "<a />"


@pytest.mark.parametrize("doc", ["", "<a>", "<a></b>"])
def test_format_invalid_raises(doc):
    with pytest.raises(ParseFailure):
        format_xml(doc)


def test_format_keeps_whitespace_in_attribute_values():
    doc = '<a x="l1&#10;l2" y="c&#9;d&#13;e"/>'
    formatted = format_xml(doc)
    assert formatted == '<a x="l1&#10;l2" y="c&#9;d&#13;e" />'
    assert xml_to_json(formatted) == xml_to_json(doc) == {
        "a": {"@x": "l1\nl2", "@y": "c\td\re"}
    }
