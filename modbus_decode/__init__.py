"""Decoder for Modbus frames captured by the Mdbus Monitor."""

__version__ = "0.1.0"

from modbus_decode.decoding import (  # noqa: E402
    DecodedHeader,
    DecodedMessage,
    DecodedValue,
    HeaderLayout,
    HEADER_LAYOUTS,
    MessageDirection,
    decode,
    hex_to_float32,
)
from modbus_decode.exceptions import (  # noqa: E402
    FormatError,
    MalformedInputError,
    NumericConversionError,
)
from modbus_decode.report import (  # noqa: E402
    format_report,
    register_addresses,
    render_table,
)

__all__ = [
    "DecodedHeader",
    "DecodedMessage",
    "DecodedValue",
    "FormatError",
    "HEADER_LAYOUTS",
    "HeaderLayout",
    "MalformedInputError",
    "MessageDirection",
    "NumericConversionError",
    "decode",
    "format_report",
    "hex_to_float32",
    "register_addresses",
    "render_table",
]
