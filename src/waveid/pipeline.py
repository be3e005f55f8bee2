"""End-to-end encode and decode pipelines.

Encode: raw audio → canonicalize → normalize_peak → encode_samples → identifier
Decode: identifier → decode_identifier → reconstruct_waveform → audio buffer

Any error aborts the whole call; there is no partial result.
"""

import logging

import numpy as np

from .audio.buffer import AudioBuffer
from .audio.context import AudioContext
from .canonicalize import canonicalize
from .codec import decode_identifier, encode_samples
from .config import WaveIdConfig
from .constants import RADIX, SAMPLE_OFFSET
from .normalize import normalize_peak
from .reconstruct import reconstruct_waveform

logger = logging.getLogger(__name__)


def audio_to_identifier(
    buffer: AudioBuffer,
    context: AudioContext,
    config: WaveIdConfig | None = None,
) -> int:
    """Compute the identifier of a raw audio clip.

    Args:
        buffer: Raw 1- or 2-channel audio at any sample rate
        context: Audio context used for resampling
        config: waveid configuration (defaults if None)

    Returns:
        Identifier in [0, 65536**sample_count)
    """
    config = config or WaveIdConfig()
    logger.info(
        f"Encoding audio: channels={buffer.channels}, sample_rate={buffer.sample_rate}, "
        f"length={buffer.length} ({buffer.duration_s:.3f}s)"
    )

    canonical = canonicalize(buffer, context, config.canonical)
    quantized = normalize_peak(canonical.get_channel_data(0))
    identifier = encode_samples(quantized, length=config.canonical.sample_count)

    logger.info(f"Encoded identifier: {identifier.bit_length()} bits")
    return identifier


def identifier_to_audio(
    identifier: int,
    context: AudioContext,
    config: WaveIdConfig | None = None,
) -> AudioBuffer:
    """Reconstruct the canonical waveform of an identifier.

    Args:
        identifier: Non-negative integer
        context: Audio context that creates the output buffer
        config: waveid configuration (defaults if None)

    Returns:
        Mono buffer at the target rate with sample_count samples
    """
    config = config or WaveIdConfig()
    logger.info("Decoding identifier to audio")

    quantized = decode_identifier(
        identifier,
        length=config.canonical.sample_count,
        out_of_range=config.identifier.out_of_range,
    )
    buffer = reconstruct_waveform(quantized, context, config.canonical)

    logger.info(
        f"Decoded audio: channels={buffer.channels}, sample_rate={buffer.sample_rate}, "
        f"length={buffer.length} ({buffer.duration_s:.3f}s)"
    )
    return buffer


def random_identifier(
    rng: np.random.Generator | None = None,
    config: WaveIdConfig | None = None,
) -> int:
    """Draw an identifier uniformly from [0, 65536**sample_count).

    Each digit is drawn independently, so every identifier is equally likely.

    Args:
        rng: Random generator (fresh default_rng if None)
        config: waveid configuration (defaults if None)
    """
    config = config or WaveIdConfig()
    rng = rng or np.random.default_rng()
    digits = rng.integers(0, RADIX, size=config.canonical.sample_count, dtype=np.int64)
    return encode_samples(digits - SAMPLE_OFFSET, length=config.canonical.sample_count)
