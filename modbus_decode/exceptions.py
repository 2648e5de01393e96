"""Errors raised while decoding Mdbus Monitor lines."""

from typing import Optional


class FormatError(ValueError):
    """Base class for lines that cannot be decoded."""


class MalformedInputError(FormatError):
    """Line is not a whitespace separated sequence of hex tokens."""


class NumericConversionError(FormatError):
    """A token expected to be hexadecimal could not be converted."""

    def __init__(self, text: str, field: Optional[str] = None):
        """
        Initialize the error.

        Args:
            text: Offending token (or concatenated tokens).
            field: Name of the field being decoded, if known.
        """
        self.text = text
        self.field = field
        if field:
            message = f"Invalid hex value {text!r} for {field}"
        else:
            message = f"Invalid hex value {text!r}"
        super().__init__(message)
