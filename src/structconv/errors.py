"""Error taxonomy shared by every converter.

Validators (``is_valid_*``) never raise. Formatting and conversion
functions raise one of the classes below with a human-readable message;
callers decide whether to surface it or fall back to the original text.
"""

from __future__ import annotations


class StructconvError(ValueError):
    """Base class for all structconv failures."""


class ParseFailure(StructconvError):
    """Input text is not well-formed for its format."""

    def __init__(self, message: str, fmt: str | None = None):
        super().__init__(message)
        self.fmt = fmt


class EncodingFailure(StructconvError):
    """A value cannot be represented in the target format."""


class UnsupportedConversion(StructconvError):
    """The requested action or target format is not supported."""
