"""Central constants for the structconv project."""

# Every document produced by json_to_xml starts with this line.
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

DEFAULT_ROOT_TAG = "root"
# Element name used for the items of a top-level array.
DEFAULT_ITEM_TAG = "item"

XML_INDENT = 2
JSON_INDENT = 2

# Canonical-value key conventions shared by both XML directions.
ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#text"

# Extra entities for attribute values; '&', '<' and '>' are always escaped.
# Whitespace is written as character references so attribute-value
# normalization on re-parse keeps it.
ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}
