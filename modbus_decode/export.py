"""JSON export of decoded messages."""

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from modbus_decode.decoding import DecodedMessage
from modbus_decode.report import function_label, register_addresses

console = Console(stderr=True)

EXPORT_VERSION = "1.0"


def message_record(message: DecodedMessage, line_number: Optional[int] = None) -> Dict[str, Any]:
    """Export record of a message with its function name and register addresses."""
    record = message.to_dict()
    record["function"] = function_label(message.header.function_code)
    record["addresses"] = register_addresses(message)
    if line_number is not None:
        record["line"] = line_number
    return record


class MessageAccumulator:
    """Accumulate decoded messages into a single output file."""

    def __init__(self, output_path: str):
        """
        Initialize the accumulator.

        Args:
            output_path: Path of the JSON file to write.
        """
        self.output_path = Path(output_path)
        self.messages: List[Dict[str, Any]] = []

    def add_message(self, message: DecodedMessage, line_number: Optional[int] = None) -> None:
        """
        Add a decoded message.

        Args:
            message: Decoded message.
            line_number: 1-based line in the source log, if known.
        """
        self.messages.append(message_record(message, line_number))

    def to_document(self) -> Dict[str, Any]:
        """Export document with version, timestamp and messages."""
        return {
            "version": EXPORT_VERSION,
            "generated": self._iso_timestamp(),
            "messages": self.messages,
        }

    def save(self) -> None:
        """Save accumulated messages to the output file."""
        with open(self.output_path, "w") as f:
            json.dump(self.to_document(), f, indent=2, allow_nan=False)

        console.print(f"📝 Saved {len(self.messages)} message(s) to {self.output_path}")

    def _iso_timestamp(self) -> str:
        """Get ISO 8601 timestamp."""
        return datetime.now(timezone.utc).isoformat()
