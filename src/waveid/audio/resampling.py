"""Audio resampling utilities for canonicalization.

This module provides band-limited resampling using scipy's polyphase FIR
method. The output length is always ``round(len(audio) * target / source)``
so that canonical lengths are predictable from the input alone.
"""

import math

import numpy as np
from numpy.typing import NDArray
from scipy import signal


def resampled_length(input_length: int, source_rate: int, target_rate: int) -> int:
    """Return the output length of a resample, rounded half to even.

    Example:
        >>> resampled_length(44100, 44100, 48000)
        48000
        >>> resampled_length(100, 22050, 48000)
        218
    """
    return round(input_length * target_rate / source_rate)


def resample_audio(
    audio: NDArray[np.float64], source_rate: int, target_rate: int
) -> NDArray[np.float64]:
    """Resample audio to target sample rate using scipy.signal.resample_poly.

    Uses a polyphase anti-aliasing filter, which keeps spectral content up to
    the lower Nyquist limit and is deterministic for a given input. Handles
    edge cases:
    - Same source/target rate: returns input unchanged
    - Empty audio: returns empty array
    - Polyphase output longer or shorter than expected: trimmed or zero-padded

    Args:
        audio: Input audio samples (float)
        source_rate: Source sample rate in Hz
        target_rate: Target sample rate in Hz

    Returns:
        Resampled audio samples (float64)

    Raises:
        ValueError: If either sample rate is not positive

    Example:
        >>> audio_44k = np.zeros(441)
        >>> len(resample_audio(audio_44k, 44100, 48000))
        480
    """
    if source_rate <= 0 or target_rate <= 0:
        raise ValueError(
            f"Sample rates must be positive: source={source_rate}, target={target_rate}"
        )

    if source_rate == target_rate:
        return audio

    if len(audio) == 0:
        return np.asarray(audio, dtype=np.float64)

    # Reduce the ratio so the polyphase filter stays small
    divisor = math.gcd(source_rate, target_rate)
    up = target_rate // divisor
    down = source_rate // divisor

    resampled = signal.resample_poly(np.asarray(audio, dtype=np.float64), up, down)

    num_samples = resampled_length(len(audio), source_rate, target_rate)
    if len(resampled) > num_samples:
        resampled = resampled[:num_samples]
    elif len(resampled) < num_samples:
        resampled = np.pad(resampled, (0, num_samples - len(resampled)))

    return resampled.astype(np.float64)  # type: ignore[no-any-return]
