"""Utility helpers for the Weapon Calculator.

Includes:
    - ANSI colorized logging setup.
    - Helper parsing functions for command-line style inputs.
"""

from __future__ import annotations

import logging
import sys

from .defaults import AFFINITY_OPTIONS
from .models import Attribute, WeaponType


# === ANSI color codes for logger ===
class ColorFormatter(logging.Formatter):
    """Custom log formatter with ANSI color codes."""

    COLORS = {
        logging.DEBUG: "\033[92m",  # Green
        logging.INFO: "\033[94m",  # Blue
        logging.WARNING: "\033[93m",  # Yellow
        logging.ERROR: "\033[91m",  # Red
        logging.CRITICAL: "\033[95m",  # Magenta
    }

    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, self.RESET)
        message = super().format(record)
        return f"{color}{message}{self.RESET}"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure a colorized logger.

    Args:
        verbose: If True, sets log level to DEBUG; otherwise INFO.

    Returns:
        logging.Logger: Configured logger.
    """
    logger = logging.getLogger("weapon_calculator")

    # Ensure we don't add duplicate handlers if called multiple times
    if any(isinstance(h.formatter, ColorFormatter) for h in logger.handlers):
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        return logger

    # Send logs to STDERR so STDOUT can be piped/parsed separately
    handler = logging.StreamHandler(sys.stderr)
    formatter = ColorFormatter("%(asctime)s [%(levelname)s]\t| %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


# === Helper functions ===
def parse_weapon_type(value: str | int) -> WeaponType:
    """Parse a weapon type from its game id, enum name or label ('Great Katana')."""
    if isinstance(value, int) or str(value).isdigit():
        return WeaponType(int(value))
    key = str(value).strip().upper().replace(" ", "_").replace("-", "_")
    try:
        return WeaponType[key]
    except KeyError:
        raise ValueError(f"Unknown weapon type: {value!r}") from None


def parse_affinity(value: str | int, options: dict[int, str] | None = None) -> int:
    """Parse an affinity from its id or display name within the given options."""
    options = AFFINITY_OPTIONS if options is None else options
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    for affinity_id, name in options.items():
        if name.lower() == text.lower():
            return affinity_id
    raise ValueError(f"Unknown affinity: {value!r}")


def format_attributes(attributes: dict[Attribute, int]) -> str:
    return " ".join(f"{a.value.capitalize()} {attributes[a]}" for a in Attribute)
