"""wavetools - Audio segment durations.

Durations are stored as whole microseconds so sums of many short segments
do not drift. Text form is "HH:MM:SS.ff" as printed by audio inspectors;
hours and minutes may be omitted on input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

MICROS_PER_SECOND = 1_000_000

_SECONDS_RE = re.compile(r"^\d+(?:\.\d+)?$")
_WHOLE_RE = re.compile(r"^\d+$")


class DurationParseError(ValueError):
    """Raised when a duration stamp cannot be parsed."""

    error_code = "DURATION_INVALID"

    def __init__(self, text: str, reason: str):
        self.text = text
        super().__init__(f"{self.error_code}: cannot parse duration {text!r}: {reason}")


@dataclass(frozen=True, order=True)
class Duration:
    """A non-negative span of audio."""

    microseconds: int = 0

    def __post_init__(self):
        if self.microseconds < 0:
            raise ValueError(f"Duration cannot be negative: {self.microseconds}us")

    @classmethod
    def parse(cls, text: str) -> Duration:
        """Parse "HH:MM:SS.ff", "MM:SS.ff" or "SS.ff".

        Args:
            text: Duration stamp.

        Returns:
            Parsed Duration.

        Raises:
            DurationParseError: If the stamp is malformed.
        """
        parts = text.strip().split(":")
        if len(parts) > 3:
            raise DurationParseError(text, "too many fields")

        *whole_parts, seconds_text = parts
        if not _SECONDS_RE.match(seconds_text):
            raise DurationParseError(text, f"bad seconds field {seconds_text!r}")
        for part in whole_parts:
            if not _WHOLE_RE.match(part):
                raise DurationParseError(text, f"bad field {part!r}")

        # Pad to [hours, minutes]
        hours, minutes = ([0, 0] + [int(p) for p in whole_parts])[-2:]
        seconds = Decimal(seconds_text)

        if whole_parts and seconds >= 60:
            raise DurationParseError(text, "seconds must be below 60")
        if len(whole_parts) == 2 and minutes >= 60:
            raise DurationParseError(text, "minutes must be below 60")

        micros = (seconds * MICROS_PER_SECOND).to_integral_value()
        return cls(int(micros) + (hours * 3600 + minutes * 60) * MICROS_PER_SECOND)

    @classmethod
    def from_seconds(cls, seconds: float) -> Duration:
        if seconds < 0:
            raise ValueError(f"Duration cannot be negative: {seconds}s")
        return cls(round(seconds * MICROS_PER_SECOND))

    def to_seconds(self) -> float:
        return self.microseconds / MICROS_PER_SECOND

    def __add__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.microseconds + other.microseconds)

    def __str__(self):
        # Rounded to hundredths, the resolution of the stamps we read
        hundredths = (self.microseconds + 5_000) // 10_000
        seconds, cs = divmod(hundredths, 100)
        minutes, seconds = divmod(seconds, 60)
        hours, minutes = divmod(minutes, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{cs:02d}"


__all__ = ["Duration", "DurationParseError", "MICROS_PER_SECOND"]
