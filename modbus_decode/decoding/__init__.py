"""Decode Mdbus Monitor log lines into Modbus messages."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from modbus_decode.decoding.header import (
    DecodedHeader,
    HeaderLayout,
    HEADER_LAYOUTS,
    DEFAULT_LAYOUT,
    decode_header,
)
from modbus_decode.decoding.registers import (
    DecodedValue,
    decode_values,
    hex_to_float32,
)
from modbus_decode.decoding.tokenizer import MessageDirection, tokenize


@dataclass(frozen=True)
class DecodedMessage:
    """Header and float values of one captured frame."""

    header: DecodedHeader
    values: Tuple[DecodedValue, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view of the message.

        Absent header fields stay None. NaN and infinite values become None
        so the result is valid JSON; the hex field keeps the bit pattern.
        """
        header = self.header
        return {
            "direction": header.direction.label,
            "slave_id": header.slave_id,
            "function_code": header.function_code,
            "start_address": header.start_address,
            "register_count": header.register_count,
            "byte_count": header.byte_count,
            "checksum": header.checksum,
            "values": [
                {
                    "raw": value.raw_tokens,
                    "hex": value.reordered_hex,
                    "value": value.value if math.isfinite(value.value) else None,
                }
                for value in self.values
            ],
        }


def decode(
    line: str,
    swapped_word_order: bool = True,
    layouts: Optional[Mapping[int, HeaderLayout]] = None,
) -> DecodedMessage:
    """
    Decode one Mdbus Monitor line.

    Examples:
        3 (0x03) Read Holding Registers response, byte count 0x10:
        01 03 10 60 3A 46 33 69 89 44 57 33 CE 43 06 8B 59 3B 72 C4 8E

        16 (0x10) Write Multiple Registers request, start 0x0064,
        0x0032 registers, byte count 0x64:
        01 10 00 64 00 32 64 48 9C 1C B6 48 94 27 C8 ... 9D A4

    Args:
        line: Log line, optionally starting with "RX" or "TX".
        swapped_word_order: True if the low register of each float pair is
            sent first (Modicon float), False for natural byte order.
        layouts: Optional function code to header layout table.

    Returns:
        The decoded message.

    Raises:
        MalformedInputError: If the line is not whitespace separated.
        NumericConversionError: If a token that must be hex is not.
    """
    direction, tokens = tokenize(line)
    header = decode_header(tokens, direction, layouts)
    values = decode_values(
        tokens, header.data_start, header.byte_count, swapped_word_order
    )
    return DecodedMessage(header=header, values=values)


__all__ = [
    "DecodedHeader",
    "DecodedMessage",
    "DecodedValue",
    "DEFAULT_LAYOUT",
    "HEADER_LAYOUTS",
    "HeaderLayout",
    "MessageDirection",
    "decode",
    "decode_header",
    "decode_values",
    "hex_to_float32",
    "tokenize",
]
