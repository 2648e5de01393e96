"""Split Mdbus Monitor log lines into byte tokens."""

import re
from enum import Enum
from typing import List, Optional, Tuple

from modbus_decode.exceptions import MalformedInputError, NumericConversionError

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_BYTE_RE = re.compile(r"[0-9A-Fa-f]{2}")

# Direction markers, matched case-sensitively at the start of the trimmed line
RECEIVE_MARKER = "RX"
TRANSMIT_MARKER = "TX"


class MessageDirection(Enum):
    """Direction of a captured frame as logged by the monitor."""

    UNKNOWN = "Unknown"
    RECEIVE = "Receive"
    TRANSMIT = "Transmit"

    @property
    def label(self) -> str:
        return self.value


def tokenize(line: str) -> Tuple[MessageDirection, List[str]]:
    """
    Split a monitor line into its direction and byte tokens.

    Args:
        line: Raw log line, e.g. "RX 01 03 04 00 00 3F 80 C4 8E".

    Returns:
        Tuple of (direction, tokens). Tokens are returned as captured; hex
        validation happens when a field is converted.

    Raises:
        MalformedInputError: If the trimmed line has no whitespace separator.
    """
    text = line.strip()
    if not any(ch.isspace() for ch in text):
        raise MalformedInputError(
            "Line does not contain whitespace separated tokens. "
            f"Use a line copied from the Mdbus Monitor log: {text!r}"
        )

    direction = MessageDirection.UNKNOWN
    if text.startswith(RECEIVE_MARKER):
        direction = MessageDirection.RECEIVE
        text = text[len(RECEIVE_MARKER):]
    elif text.startswith(TRANSMIT_MARKER):
        direction = MessageDirection.TRANSMIT
        text = text[len(TRANSMIT_MARKER):]

    return direction, text.split()


def parse_hex(text: str, field: Optional[str] = None, bits: Optional[int] = None) -> int:
    """
    Convert a hex string (one or more concatenated tokens) to an unsigned int.

    Args:
        text: Hex digits without prefix or sign.
        field: Field name used in the error message.
        bits: Maximum width of the result, unchecked when None.

    Returns:
        Parsed value.

    Raises:
        NumericConversionError: If text is not plain hex or exceeds `bits`.
    """
    if not _HEX_RE.fullmatch(text):
        raise NumericConversionError(text, field)
    value = int(text, 16)
    if bits is not None and value >> bits:
        raise NumericConversionError(text, field)
    return value


def parse_byte(token: str, field: Optional[str] = None) -> int:
    """
    Convert a single byte token (exactly two hex digits).

    Raises:
        NumericConversionError: If the token is not two hex digits.
    """
    if not _BYTE_RE.fullmatch(token):
        raise NumericConversionError(token, field)
    return int(token, 16)
