"""
Time-sorted identifiers (TSID) for outbox messages.

A TSID is a 64-bit value: 42 bits of milliseconds since 2020-01-01T00:00:00Z
followed by 22 random bits, rendered as 13 Crockford base-32 characters.
IDs from different milliseconds sort lexicographically by creation time.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable
from datetime import datetime, timezone

CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
TSID_LENGTH = 13
RANDOM_BITS = 22
TIMESTAMP_BITS = 42
# 2020-01-01T00:00:00Z in Unix milliseconds
CUSTOM_EPOCH_MS = 1577836800000

_RANDOM_MASK = (1 << RANDOM_BITS) - 1
_MAX_ELAPSED_MS = (1 << TIMESTAMP_BITS) - 1
_SYMBOL_VALUES = {symbol: index for index, symbol in enumerate(CROCKFORD_ALPHABET)}


def _system_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class TsidGenerator:
    """
    TSID generator with injectable clock and random source.

    Args:
        clock: Returns the current Unix time in milliseconds
        random_bits: Returns a non-negative integer with the requested number of random bits
    """

    def __init__(
        self,
        clock: Callable[[], int] = _system_clock_ms,
        random_bits: Callable[[int], int] = secrets.randbits,
    ) -> None:
        self._clock = clock
        self._random_bits = random_bits

    def generate(self) -> str:
        """Generate a new 13-character TSID.

        Raises:
            ValueError: If the clock reads before the custom epoch or beyond the
                42-bit timestamp range
        """
        now_ms = self._clock()
        elapsed = now_ms - CUSTOM_EPOCH_MS
        if elapsed < 0:
            raise ValueError(
                f"System clock ({now_ms} ms) is before the TSID epoch ({CUSTOM_EPOCH_MS} ms)"
            )
        if elapsed > _MAX_ELAPSED_MS:
            raise ValueError(f"System clock ({now_ms} ms) exceeds the 42-bit TSID range")

        random_part = self._random_bits(RANDOM_BITS) & _RANDOM_MASK
        return encode((elapsed << RANDOM_BITS) | random_part)


def encode(value: int) -> str:
    """Encode an unsigned 64-bit value as exactly 13 Crockford base-32 symbols."""
    chars = []
    remaining = value
    for _ in range(TSID_LENGTH):
        chars.append(CROCKFORD_ALPHABET[remaining & 31])
        remaining >>= 5
    return "".join(reversed(chars))


def is_valid(tsid: str) -> bool:
    """Return True if ``tsid`` has the TSID format. Says nothing about when it was issued."""
    # Non-ASCII letters such as "ß" upper-case into alphabet symbols
    if len(tsid) != TSID_LENGTH or not tsid.isascii():
        return False
    return all(symbol in _SYMBOL_VALUES for symbol in tsid.upper())


def decode(tsid: str) -> int:
    """Decode a TSID (case-insensitive) back to its 64-bit value."""
    if not is_valid(tsid):
        raise ValueError(f"Invalid TSID: {tsid!r}")

    value = 0
    for symbol in tsid.upper():
        value = (value << 5) | _SYMBOL_VALUES[symbol]
    return value


def timestamp_of(tsid: str) -> datetime:
    """Return the UTC creation time embedded in a TSID, at millisecond precision."""
    elapsed = decode(tsid) >> RANDOM_BITS
    unix_ms = CUSTOM_EPOCH_MS + elapsed
    return datetime.fromtimestamp(unix_ms // 1000, tz=timezone.utc).replace(
        microsecond=(unix_ms % 1000) * 1000
    )


_default_generator = TsidGenerator()


def generate() -> str:
    """Generate a new TSID using the system clock and a CSPRNG."""
    return _default_generator.generate()
