from dataclasses import dataclass
from typing import ClassVar

from exceptions import DecimalParseError

SCALE = 10_000
FRACTIONAL_DIGITS = 4

MIN_SCALED = -(2 ** 63)
MAX_SCALED = 2 ** 63 - 1


def _is_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


@dataclass(frozen=True, order=True)
class FixedDecimal:
    """
    Signed fixed-point amount with exactly 4 fractional digits.
    Stored as a scaled integer (value * 10_000), so arithmetic never rounds.
    """

    scaled: int = 0

    ZERO: ClassVar["FixedDecimal"]

    @classmethod
    def from_parts(cls, integral: int, fractional: int = 0) -> "FixedDecimal":
        """Build from an integral part and a fraction in ten-thousandths, e.g. (1, 5000) is 1.5."""
        return cls(integral * SCALE + fractional)

    @classmethod
    def parse(cls, text: str) -> "FixedDecimal":
        """
        Parse decimal text such as "1", "-0.25" or "10000.00002".

        Digits past the fourth fractional place are truncated, not rounded.

        Raises:
            DecimalParseError: non-numeric parts, more than one dot, or a value
                outside the 64-bit scaled range.
        """
        stripped = text.strip()
        sign = 1
        if stripped.startswith("-"):
            sign = -1
            stripped = stripped[1:]

        parts = stripped.split(".")
        if len(parts) > 2:
            raise DecimalParseError(f"More than one dot in decimal number: {text!r}")

        integral = parts[0]
        if not _is_digits(integral):
            raise DecimalParseError(f"Invalid integral part in decimal number: {text!r}")

        fractional = parts[1] if len(parts) == 2 else ""
        if fractional and not _is_digits(fractional):
            raise DecimalParseError(f"Invalid fractional part in decimal number: {text!r}")

        fractional = fractional[:FRACTIONAL_DIGITS].ljust(FRACTIONAL_DIGITS, "0")
        scaled = sign * (int(integral) * SCALE + int(fractional))

        if not MIN_SCALED <= scaled <= MAX_SCALED:
            raise DecimalParseError(f"Decimal number out of range: {text!r}")
        return cls(scaled)

    def __add__(self, other: "FixedDecimal") -> "FixedDecimal":
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return FixedDecimal(self.scaled + other.scaled)

    def __sub__(self, other: "FixedDecimal") -> "FixedDecimal":
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return FixedDecimal(self.scaled - other.scaled)

    def __neg__(self) -> "FixedDecimal":
        return FixedDecimal(-self.scaled)

    def is_negative(self) -> bool:
        return self.scaled < 0

    def __str__(self) -> str:
        sign = "-" if self.scaled < 0 else ""
        integral, fractional = divmod(abs(self.scaled), SCALE)
        digits = f"{fractional:04d}".rstrip("0") or "0"
        return f"{sign}{integral}.{digits}"

    def __repr__(self) -> str:
        return f"FixedDecimal('{self}')"


FixedDecimal.ZERO = FixedDecimal(0)
