"""Exception hierarchy for waveid.

Every error is terminal for the encode or decode call that raised it.
"""

from typing import Any


class WaveIdError(Exception):
    """Base exception for waveid errors."""

    pass


class UnsupportedChannelLayoutError(WaveIdError):
    """Raised when input audio has a channel count other than 1 or 2."""

    def __init__(self, expected: tuple[int, ...], actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Unsupported channel layout: expected one of {list(expected)} channels, got {actual}"
        )


class InvalidCanonicalFormError(WaveIdError):
    """Raised when audio or samples violate the canonical form.

    Attributes:
        field: Which property failed (channels, sample_rate, length, samples, digits)
        expected: Expected value
        actual: Observed value
    """

    def __init__(self, field: str, expected: Any, actual: Any, detail: str = "") -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        message = f"Invalid canonical form: {field} expected {expected}, got {actual}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DecodeFailureError(WaveIdError):
    """Raised when upstream audio decoding fails."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to decode audio from {source}: {reason}")


class EncodeFailureError(WaveIdError):
    """Raised when a reconstructed waveform cannot be written out."""

    def __init__(self, destination: str, reason: str) -> None:
        self.destination = destination
        self.reason = reason
        super().__init__(f"Failed to write audio to {destination}: {reason}")


class IdentifierOutOfRangeError(WaveIdError):
    """Raised when an identifier lies outside [0, RADIX**sample_count)."""

    def __init__(self, identifier_bits: int, max_bits: int, negative: bool = False) -> None:
        self.identifier_bits = identifier_bits
        self.max_bits = max_bits
        self.negative = negative
        if negative:
            message = "Identifier out of range: identifiers must be non-negative"
        else:
            message = (
                f"Identifier out of range: {identifier_bits} bits exceeds "
                f"the {max_bits}-bit identifier space"
            )
        super().__init__(message)


class InvalidIdentifierError(WaveIdError, ValueError):
    """Raised when identifier text is not a plain run of decimal digits."""

    pass


class AudioContextClosedError(WaveIdError):
    """Raised when an audio context is used after close()."""

    pass
