"""Basic tests for configuration, logging and export."""

import json
import logging
from pathlib import Path

import pytest

from modbus_decode import decode
from modbus_decode.config import ConfigManager, DecoderSettings, load_settings
from modbus_decode.export import MessageAccumulator, message_record
from modbus_decode.logs import LogManager


def test_settings_defaults_without_file(tmp_path):
    """A missing config file gives the defaults."""
    settings = load_settings(tmp_path / "missing.ini")
    assert settings == DecoderSettings()
    assert settings.swapped_word_order is True
    assert settings.log_level == "INFO"
    assert settings.log_dir is None


def test_settings_from_file(tmp_path):
    config_path = tmp_path / "modbus_decode.ini"
    config_path.write_text(
        "[decoder]\n"
        "swapped_word_order = no\n"
        "\n"
        "[logging]\n"
        "level = debug\n"
        f"log_dir = {tmp_path / 'logs'}\n"
    )

    manager = ConfigManager(config_path)
    manager.load()
    settings = manager.settings()

    assert settings.swapped_word_order is False
    assert settings.log_level == "DEBUG"
    assert settings.log_dir == tmp_path / "logs"


def test_settings_invalid_boolean(tmp_path):
    config_path = tmp_path / "modbus_decode.ini"
    config_path.write_text("[decoder]\nswapped_word_order = sometimes\n")
    with pytest.raises(ValueError):
        load_settings(config_path)


def test_log_manager_writes_file(tmp_path):
    manager = LogManager("modbus_decode_test", log_dir=tmp_path, level="DEBUG")
    logger = manager.get_logger()
    try:
        logger.debug("decoded %d value(s)", 3)
        for handler in logger.handlers:
            handler.flush()

        assert manager.log_file == tmp_path / "modbus_decode_test.log"
        text = manager.log_file.read_text()
        assert "[DEBUG] modbus_decode_test: decoded 3 value(s)" in text
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_log_manager_replaces_handlers():
    logger = LogManager("modbus_decode_test").get_logger()
    logger = LogManager("modbus_decode_test", level="WARNING").get_logger()
    try:
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def test_message_record():
    record = message_record(decode("01 03 04 00 00 3F 80 C4 8E"), line_number=7)
    assert record["line"] == 7
    assert record["function"] == "Read Holding Registers"
    assert record["direction"] == "Unknown"
    assert record["start_address"] is None
    assert record["register_count"] is None
    assert record["byte_count"] == 4
    assert record["checksum"] == "C48E"
    assert record["addresses"] is None
    assert record["values"] == [{"raw": "00 00 3F 80", "hex": "3F800000", "value": 1.0}]


def test_message_accumulator(tmp_path):
    """Test message accumulation."""
    output_path = Path(tmp_path) / "messages.json"
    accumulator = MessageAccumulator(str(output_path))

    accumulator.add_message(decode("TX 01 10 00 00 00 02 04 00 00 3F 80 AB CD"), line_number=1)
    accumulator.add_message(decode("01 03 04 00 00 3F 80 C4 8E"))
    accumulator.save()

    assert output_path.exists()
    with open(output_path, "r") as f:
        data = json.load(f)

    assert data["version"] == "1.0"
    assert "generated" in data
    assert len(data["messages"]) == 2
    assert data["messages"][0]["direction"] == "Transmit"
    assert data["messages"][0]["start_address"] == 0
    assert data["messages"][0]["addresses"] == [40001]
    assert "line" not in data["messages"][1]


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_message_accumulator_non_finite_values(tmp_path):
    """NaN and infinity bit patterns export as null, keeping the hex."""
    output_path = tmp_path / "messages.json"
    accumulator = MessageAccumulator(str(output_path))
    accumulator.add_message(decode("01 03 08 00 00 7F C0 00 00 FF 80 C4 8E"))
    accumulator.save()

    data = json.loads(output_path.read_text(), parse_constant=_reject_constant)
    values = data["messages"][0]["values"]
    assert [v["hex"] for v in values] == ["7FC00000", "FF800000"]
    assert [v["value"] for v in values] == [None, None]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
