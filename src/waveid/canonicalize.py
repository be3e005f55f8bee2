"""Canonicalization of raw audio before encoding.

Turns arbitrary 1- or 2-channel audio into the canonical form the encoder
requires: mono, at the target sample rate, with exactly sample_count samples.

Design:
    raw buffer → channel check → downmix (stereo only) → resample via the
    audio context → length policy → post-condition check
"""

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .audio.buffer import AudioBuffer
from .audio.context import AudioContext
from .config import CanonicalFormConfig
from .constants import SUPPORTED_CHANNEL_COUNTS
from .errors import InvalidCanonicalFormError, UnsupportedChannelLayoutError

logger = logging.getLogger(__name__)


def downmix(left: ArrayLike, right: ArrayLike) -> NDArray[np.float64]:
    """Average two channels sample for sample: (left[i] + right[i]) / 2.

    Raises:
        InvalidCanonicalFormError: If the channels differ in length
    """
    left_arr = np.asarray(left, dtype=np.float64)
    right_arr = np.asarray(right, dtype=np.float64)
    if left_arr.shape != right_arr.shape:
        raise InvalidCanonicalFormError(
            "length", f"right channel of {len(left_arr)} samples", len(right_arr)
        )
    return (left_arr + right_arr) / 2


def fit_length(samples: NDArray[np.float64], length: int) -> NDArray[np.float64]:
    """Zero-pad or truncate samples to exactly length."""
    if len(samples) > length:
        return samples[:length]
    if len(samples) < length:
        return np.pad(samples, (0, length - len(samples)))
    return samples


def canonicalize(
    buffer: AudioBuffer,
    context: AudioContext,
    config: CanonicalFormConfig | None = None,
) -> AudioBuffer:
    """Convert raw audio into canonical form.

    Args:
        buffer: Raw audio with 1 or 2 channels
        context: Audio context used for resampling
        config: Canonical form settings (defaults if None)

    Returns:
        Mono buffer at config.target_sample_rate with config.sample_count samples

    Raises:
        UnsupportedChannelLayoutError: If the buffer has neither 1 nor 2 channels
        InvalidCanonicalFormError: If the input is empty, or the result fails
            the canonical form check ("strict" length policy)
    """
    config = config or CanonicalFormConfig()

    if buffer.channels not in SUPPORTED_CHANNEL_COUNTS:
        raise UnsupportedChannelLayoutError(SUPPORTED_CHANNEL_COUNTS, buffer.channels)
    if buffer.length == 0:
        raise InvalidCanonicalFormError("length", "> 0", 0, "input audio is empty")

    logger.debug(
        f"Canonicalizing: channels={buffer.channels}, sample_rate={buffer.sample_rate}, "
        f"length={buffer.length}"
    )

    if buffer.channels == 2:
        mono = AudioBuffer.mono(
            downmix(buffer.get_channel_data(0), buffer.get_channel_data(1)),
            buffer.sample_rate,
        )
    else:
        mono = buffer

    resampled = context.resample(mono, config.target_sample_rate)
    samples = resampled.get_channel_data(0)

    if config.length_policy == "fit" and len(samples) != config.sample_count:
        logger.debug(f"Fitting length {len(samples)} → {config.sample_count}")
        samples = fit_length(samples, config.sample_count)

    result = AudioBuffer.mono(samples, resampled.sample_rate)
    check_canonical_form(result, config)

    logger.debug(
        f"Canonical buffer: channels={result.channels}, sample_rate={result.sample_rate}, "
        f"length={result.length}"
    )
    return result


def check_canonical_form(buffer: AudioBuffer, config: CanonicalFormConfig) -> None:
    """Verify channels == 1, rate == target, length == sample_count.

    Raises:
        InvalidCanonicalFormError: On the first property that does not hold
    """
    if buffer.channels != 1:
        raise InvalidCanonicalFormError("channels", 1, buffer.channels)
    if buffer.sample_rate != config.target_sample_rate:
        raise InvalidCanonicalFormError(
            "sample_rate", config.target_sample_rate, buffer.sample_rate
        )
    if buffer.length != config.sample_count:
        raise InvalidCanonicalFormError("length", config.sample_count, buffer.length)
