"""Positional base-65536 packing of quantized samples into one integer.

A canonical clip of N int16 samples is read as an N-digit number in base
65536, most significant digit first, where each digit is ``sample + 32768``:

    identifier = 0
    for sample in samples:
        identifier = identifier * 65536 + (sample + 32768)

Since 65536 == 2**16, that loop equals reading the digits as big-endian
unsigned 16-bit words and calling ``int.from_bytes``. The byte form runs in
linear time, which matters for 48000-digit identifiers.

The decimal text form of an identifier is the only wire format:
base-10 digits, no sign.
"""

import logging
import re
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .constants import (
    DEFAULT_SAMPLE_COUNT,
    DIGIT_BITS,
    DIGIT_BYTES,
    INT16_MAX,
    INT16_MIN,
    SAMPLE_OFFSET,
    identifier_upper_bound,
)
from .errors import IdentifierOutOfRangeError, InvalidCanonicalFormError, InvalidIdentifierError

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")

# Digits on the wire, big-endian unsigned 16-bit
_DIGIT_DTYPE = np.dtype(">u2")


def encode_samples(samples: ArrayLike, length: int = DEFAULT_SAMPLE_COUNT) -> int:
    """Pack quantized samples into an identifier.

    Args:
        samples: Exactly ``length`` integers in [-32768, 32767]
        length: Canonical sample count

    Returns:
        Identifier in [0, 65536**length)

    Raises:
        InvalidCanonicalFormError: If the sample count differs from length, or
            a sample falls outside the int16 range

    Example:
        >>> encode_samples([-32768, -32767], length=2)
        1
        >>> encode_samples([-32767, -32768], length=2)
        65536
    """
    values = np.asarray(samples)
    if values.ndim != 1 or len(values) != length:
        raise InvalidCanonicalFormError("length", length, values.size)
    if values.size and not np.issubdtype(values.dtype, np.integer):
        raise InvalidCanonicalFormError("samples", "integer samples", str(values.dtype))

    wide = values.astype(np.int64)
    if wide.size and (wide.min() < INT16_MIN or wide.max() > INT16_MAX):
        raise InvalidCanonicalFormError(
            "samples",
            f"values in [{INT16_MIN}, {INT16_MAX}]",
            f"[{int(wide.min())}, {int(wide.max())}]",
        )

    digits = (wide + SAMPLE_OFFSET).astype(_DIGIT_DTYPE)
    identifier = int.from_bytes(digits.tobytes(), byteorder="big", signed=False)

    logger.debug(f"Encoded {length} samples into a {identifier.bit_length()}-bit identifier")
    return identifier


def decode_identifier(
    identifier: int,
    length: int = DEFAULT_SAMPLE_COUNT,
    out_of_range: str = "reject",
) -> NDArray[np.int16]:
    """Unpack an identifier into quantized samples.

    Args:
        identifier: Non-negative integer
        length: Canonical sample count
        out_of_range: "reject" raises for identifiers >= 65536**length,
            "truncate" keeps the low ``length`` digits

    Returns:
        ``length`` int16 samples, most significant digit first

    Raises:
        IdentifierOutOfRangeError: If the identifier is negative, or too large
            under the "reject" policy
        ValueError: If out_of_range is not a known policy

    Example:
        >>> decode_identifier(65536, length=2).tolist()
        [-32767, -32768]
    """
    if out_of_range not in ("reject", "truncate"):
        raise ValueError(f"Unknown out-of-range policy: {out_of_range}")

    max_bits = DIGIT_BITS * length
    if identifier < 0:
        raise IdentifierOutOfRangeError(identifier.bit_length(), max_bits, negative=True)

    if identifier.bit_length() > max_bits:
        if out_of_range == "reject":
            raise IdentifierOutOfRangeError(identifier.bit_length(), max_bits)
        logger.warning(
            f"Truncating {identifier.bit_length()}-bit identifier to its low {length} digits"
        )
        identifier &= identifier_upper_bound(length) - 1

    raw = identifier.to_bytes(length * DIGIT_BYTES, byteorder="big", signed=False)
    digits = np.frombuffer(raw, dtype=_DIGIT_DTYPE).astype(np.int32)
    return (digits - SAMPLE_OFFSET).astype(np.int16)  # type: ignore[no-any-return]


_digit_limit_lock = threading.Lock()


@contextmanager
def _unbounded_int_digits() -> Iterator[None]:
    """Lift CPython's int/str conversion digit limit for the duration.

    The limit is interpreter-wide, so while a conversion runs every thread in
    the process sees it lifted. The lock keeps concurrent conversions from
    restoring each other's saved value; it cannot shield unrelated code that
    converts untrusted text on another thread at the same moment.
    """
    with _digit_limit_lock:
        previous = sys.get_int_max_str_digits()
        sys.set_int_max_str_digits(0)
        try:
            yield
        finally:
            sys.set_int_max_str_digits(previous)


def parse_identifier(text: str) -> int:
    """Parse the decimal text form of an identifier.

    Surrounding whitespace is ignored. Leading zeros are accepted.

    Raises:
        InvalidIdentifierError: If the text is empty or has anything but digits
    """
    stripped = text.strip()
    if not _DIGITS_RE.fullmatch(stripped):
        preview = stripped[:32] + ("..." if len(stripped) > 32 else "")
        raise InvalidIdentifierError(
            f"Identifier must be a non-empty string of decimal digits, got {preview!r}"
        )
    with _unbounded_int_digits():
        return int(stripped)


def format_identifier(identifier: int) -> str:
    """Format an identifier as decimal digits.

    Raises:
        IdentifierOutOfRangeError: If the identifier is negative
    """
    if identifier < 0:
        raise IdentifierOutOfRangeError(identifier.bit_length(), 0, negative=True)
    with _unbounded_int_digits():
        return str(identifier)
