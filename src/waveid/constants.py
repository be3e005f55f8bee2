"""Fixed constants of the identifier scheme.

RADIX and the sample offset define the digit encoding and never change.
The sample count and target sample rate are defaults only; both are
configurable independently through ``waveid.config``.
"""

from typing import Final

RADIX: Final[int] = 65536  # one digit per 16-bit sample
DIGIT_BITS: Final[int] = 16
DIGIT_BYTES: Final[int] = 2
SAMPLE_OFFSET: Final[int] = 32768  # int16 -> [0, 65535]
FULL_SCALE: Final[int] = 32767
INT16_MIN: Final[int] = -32768
INT16_MAX: Final[int] = 32767

DEFAULT_SAMPLE_COUNT: Final[int] = 48000
DEFAULT_TARGET_SAMPLE_RATE: Final[int] = 48000  # Hz

SUPPORTED_CHANNEL_COUNTS: Final[tuple[int, ...]] = (1, 2)


def identifier_upper_bound(sample_count: int = DEFAULT_SAMPLE_COUNT) -> int:
    """Return RADIX**sample_count, the exclusive upper bound of identifiers."""
    return 1 << (DIGIT_BITS * sample_count)
