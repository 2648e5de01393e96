"""Logging setup for the command line tool."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogManager:
    """Configures the package logger with console and optional file output."""

    def __init__(
        self,
        name: str = "modbus_decode",
        log_dir: Union[str, Path, None] = None,
        level: str = "INFO",
    ):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        # Reconfiguring replaces our earlier handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(self.logger.level)
        ch.setFormatter(formatter)
        self.logger.addHandler(ch)

        self.log_file: Optional[Path] = None
        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self.log_file = log_path / f"{name}.log"
            fh = logging.FileHandler(self.log_file)
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)

    def get_logger(self) -> logging.Logger:
        """Get configured logger."""
        return self.logger
