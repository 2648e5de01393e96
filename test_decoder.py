#!/usr/bin/env python3
"""Test tokenizing and header decoding of Mdbus Monitor lines."""

import pytest

from modbus_decode import (
    HEADER_LAYOUTS,
    HeaderLayout,
    MalformedInputError,
    MessageDirection,
    NumericConversionError,
    decode,
)
from modbus_decode.decoding import decode_header, tokenize

# Read Holding Registers response, byte count 0x10, CRC C4 8E
READ_LINE = "01 03 10 60 3A 46 33 69 89 44 57 33 CE 43 06 8B 59 3B 72 C4 8E"

# Write Multiple Registers request: start 0x0064, 0x0032 registers, 0x64 bytes
WRITE_LINE = (
    "01 10 00 64 00 32 64 48 9C 1C B6 48 94 27 C8 48 98 95 47 48 87 F7 BD "
    "42 AC 07 2B 42 AE 57 91 42 AC 89 5E 42 AF DE 29 00 00 00 00 00 00 00 00 "
    "00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 "
    "45 C9 F0 4D 45 CA 95 4D 45 C9 23 FE 45 C9 64 DF 42 0A 66 66 42 0C CC CD "
    "42 13 33 33 42 11 33 33 42 9E CC CD 9D A4"
)


def test_tokenize_plain_line():
    """Tokens are split on whitespace, direction unknown."""
    direction, tokens = tokenize("01 03\t04  00 00 3F 80 C4 8E\n")
    assert direction is MessageDirection.UNKNOWN
    assert tokens == ["01", "03", "04", "00", "00", "3F", "80", "C4", "8E"]


def test_tokenize_direction_markers():
    """RX/TX at the start of the trimmed line set the direction."""
    direction, tokens = tokenize("  RX 01 03 02 00 01 C4 8E")
    assert direction is MessageDirection.RECEIVE
    assert tokens[0] == "01"

    direction, tokens = tokenize("TX 01 10 00 64")
    assert direction is MessageDirection.TRANSMIT
    assert tokens == ["01", "10", "00", "64"]


def test_tokenize_marker_is_case_and_position_sensitive():
    direction, tokens = tokenize("rx 01 03")
    assert direction is MessageDirection.UNKNOWN
    assert tokens == ["rx", "01", "03"]

    direction, tokens = tokenize("01 RX 03")
    assert direction is MessageDirection.UNKNOWN
    assert tokens == ["01", "RX", "03"]


@pytest.mark.parametrize("line", ["0110006400326448", "  0103  ", "RX0103"])
def test_tokenize_rejects_concatenated_hex(line):
    """Lines without whitespace are rejected, not re-tokenized."""
    with pytest.raises(MalformedInputError):
        tokenize(line)


def test_decode_read_holding_registers():
    """Function 3 response: byte count at token 2, no start address."""
    message = decode(READ_LINE)
    header = message.header

    assert header.direction is MessageDirection.UNKNOWN
    assert header.slave_id == 1
    assert header.function_code == 3
    assert header.byte_count == 16
    assert header.start_address is None
    assert header.register_count is None
    assert header.checksum == "C48E"
    assert header.data_start == 3
    assert len(message.values) == 4


def test_decode_read_input_registers_shares_layout():
    message = decode(READ_LINE.replace("01 03", "01 04", 1))
    assert message.header.function_code == 4
    assert message.header.byte_count == 16
    assert message.header.start_address is None
    assert len(message.values) == 4


def test_decode_write_multiple_registers():
    """Function 16 request: start address, register count, byte count at token 6."""
    message = decode(WRITE_LINE)
    header = message.header

    assert header.slave_id == 1
    assert header.function_code == 16
    assert header.start_address == 100
    assert header.register_count == 50
    assert header.byte_count == 100
    assert header.checksum == "9DA4"
    assert header.data_start == 7
    assert len(message.values) == 25
    assert message.values[0].raw_tokens == "48 9C 1C B6"
    assert message.values[0].reordered_hex == "1CB6489C"


def test_decode_write_with_zero_start_address_keeps_zero():
    """A start address of 0 is present, not absent."""
    header = decode("01 10 00 00 00 02 04 00 00 3F 80 AB CD").header
    assert header.start_address == 0
    assert header.register_count == 2


def test_header_fields_need_a_following_token():
    """Each field is read only when at least one more token was captured."""
    header = decode_header([])
    assert (header.slave_id, header.function_code, header.byte_count) == (0, 0, 0)
    assert header.checksum is None
    assert header.data_start == 3

    header = decode_header(["01"])
    assert header.slave_id == 0
    assert header.checksum is None

    header = decode_header(["01", "03"])
    assert header.slave_id == 1
    assert header.function_code == 0
    assert header.checksum == "0103"

    header = decode_header(["01", "03", "10"])
    assert header.function_code == 3
    assert header.byte_count == 0

    header = decode_header(["01", "03", "10", "60"])
    assert header.byte_count == 16


def test_write_header_partial_capture():
    tokens = ["01", "10", "00", "64", "00"]
    header = decode_header(tokens)
    assert header.start_address == 100
    assert header.register_count is None
    assert header.byte_count == 0

    header = decode_header(tokens + ["32", "64"])
    assert header.register_count == 50
    assert header.byte_count == 0

    header = decode_header(tokens + ["32", "64", "48"])
    assert header.byte_count == 100


def test_unknown_function_code_uses_default_layout():
    """Unrecognized codes decode with no byte count, so no values."""
    message = decode("01 08 00 00 12 34 AB CD")
    assert message.header.function_code == 8
    assert message.header.byte_count == 0
    assert message.header.start_address is None
    assert message.header.data_start == 3
    assert message.header.checksum == "ABCD"
    assert message.values == ()


def test_custom_layout_table():
    """New function codes are added through the layout table."""
    layouts = dict(HEADER_LAYOUTS)
    layouts[0x41] = HeaderLayout(data_start=5, byte_count_index=4, start_address_indices=(2, 3))

    message = decode("01 41 00 0A 04 00 00 3F 80 AB CD", layouts=layouts)
    assert message.header.start_address == 10
    assert message.header.byte_count == 4
    assert [v.value for v in message.values] == [1.0]

    # The default table is untouched
    assert 0x41 not in HEADER_LAYOUTS


def test_direction_is_carried_into_header():
    assert decode("RX " + READ_LINE).header.direction is MessageDirection.RECEIVE
    assert decode("TX " + WRITE_LINE).header.direction is MessageDirection.TRANSMIT


def test_checksum_is_last_two_tokens():
    """Checksum does not depend on function code or byte count."""
    for line in [READ_LINE, WRITE_LINE, "01 08 00 00 12 34 AB CD", "01 03 FF 00 11"]:
        tokens = line.split()
        assert decode(line).header.checksum == tokens[-2] + tokens[-1]


def test_non_hex_function_code():
    with pytest.raises(NumericConversionError) as excinfo:
        decode("01 GZ 10 60 3A")
    assert excinfo.value.text == "GZ"
    assert excinfo.value.field == "function code"


def test_non_hex_slave_id_after_lowercase_marker():
    with pytest.raises(NumericConversionError) as excinfo:
        decode("rx 01 03 04 00 00 3F 80 C4 8E")
    assert excinfo.value.field == "slave id"


def test_prefixed_hex_is_rejected():
    with pytest.raises(NumericConversionError):
        decode("01 0x 04 00 00 3F 80 C4 8E")


@pytest.mark.parametrize(
    "line, field",
    [
        ("FFF 03 04 00 00 3F 80 C4 8E", "slave id"),
        ("01 3 04 00 00 3F 80 C4 8E", "function code"),
        ("01 03 104 00 00 3F 80 C4 8E", "byte count"),
        ("01 10 0 64 00 04 08 00 00 3F 80 9D A4", "start address"),
        ("01 10 00 64 000 4 08 00 00 3F 80 9D A4", "register count"),
    ],
)
def test_header_tokens_must_be_single_bytes(line, field):
    """Header tokens are two hex digits; wider or narrower tokens are rejected."""
    with pytest.raises(NumericConversionError) as excinfo:
        decode(line)
    assert excinfo.value.field == field


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
