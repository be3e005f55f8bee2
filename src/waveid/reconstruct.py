"""Waveform reconstruction from quantized samples."""

import numpy as np
from numpy.typing import ArrayLike

from .audio.buffer import AudioBuffer
from .audio.context import AudioContext
from .config import CanonicalFormConfig
from .constants import FULL_SCALE
from .errors import InvalidCanonicalFormError


def reconstruct_waveform(
    quantized: ArrayLike,
    context: AudioContext,
    config: CanonicalFormConfig | None = None,
) -> AudioBuffer:
    """Scale int16 samples back to floats: sample / 32767.0.

    This undoes the normalizer's scaling but not its rounding, and the
    original peak amplitude is not recoverable. -32768 maps slightly below -1.0.

    Args:
        quantized: config.sample_count int16 samples
        context: Audio context that creates the output buffer
        config: Canonical form settings (defaults if None)

    Returns:
        Mono buffer at config.target_sample_rate

    Raises:
        InvalidCanonicalFormError: If the sample count is wrong
    """
    config = config or CanonicalFormConfig()
    values = np.asarray(quantized)
    if values.ndim != 1 or len(values) != config.sample_count:
        raise InvalidCanonicalFormError("length", config.sample_count, values.size)

    samples = values.astype(np.float64) / float(FULL_SCALE)
    return context.create_buffer([samples], config.target_sample_rate)
