"""Command-line argument validation and conversion into simulation settings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_MAX_EAT = 9999999

_USAGE_LINES = (
    "         wrong input ",
    " -------------------------------",
    "|        u need 4 inputs        |",
    "| 1. nbr of philos              |",
    "| 2. time to die (in ms)        |",
    "| 3. time to eat (in ms)        |",
    "| 4. time to sleep (in ms)      |",
    "| 5. (optinal) max times to eat |",
    "|         try again   :)        |",
    " -------------------------------",
)


def usage_message() -> str:
    """Return the text shown when the arguments are wrong."""
    return "\n".join(_USAGE_LINES)


class UsageError(ValueError):
    """Raised when the command-line arguments are unusable."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else usage_message())


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    number_of_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    max_eat: int = DEFAULT_MAX_EAT


def leading_number(text: str) -> int:
    """Convert the leading run of decimal digits to a 32-bit signed integer.

    Parsing stops at the first non-digit; an empty run gives 0.
    """
    digits = []
    for char in text:
        if not "0" <= char <= "9":
            break
        digits.append(char)
    if not digits:
        return 0
    value = int("".join(digits)) & 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


def is_valid_number(text: str | None) -> bool:
    """Tell whether the text is a non-empty run of ASCII digits."""
    if not text:
        return False
    return all("0" <= char <= "9" for char in text)


def parse_arguments(args: Sequence[str]) -> Settings:
    """Validate the arguments (program name excluded) and build settings."""
    if not 4 <= len(args) <= 5:
        raise UsageError()
    if not all(is_valid_number(arg) for arg in args):
        raise UsageError()
    numbers = [leading_number(arg) for arg in args]
    max_eat = numbers[4] if len(numbers) == 5 else DEFAULT_MAX_EAT
    return Settings(
        number_of_philos=numbers[0],
        time_to_die=numbers[1],
        time_to_eat=numbers[2],
        time_to_sleep=numbers[3],
        max_eat=max_eat,
    )