"""Audio file collaborator built on soundfile.

Decodes container formats (WAV, FLAC, OGG, ...) into AudioBuffer and writes
reconstructed buffers back out as PCM WAV. The codec core never touches files;
this module is the boundary where libsndfile failures become DecodeFailureError
or EncodeFailureError.
"""

import logging
from pathlib import Path
from typing import BinaryIO

import numpy as np
import soundfile as sf

from ..errors import DecodeFailureError, EncodeFailureError
from .buffer import AudioBuffer

logger = logging.getLogger(__name__)


def read_audio(source: str | Path | BinaryIO) -> AudioBuffer:
    """Decode an audio file into an AudioBuffer.

    Args:
        source: File path or binary file-like object

    Returns:
        Buffer with one float64 channel array per file channel

    Raises:
        DecodeFailureError: If the file is missing, unreadable, or empty
    """
    name = str(source) if isinstance(source, (str, Path)) else getattr(source, "name", "<stream>")

    try:
        data, sample_rate = sf.read(source, dtype="float64", always_2d=True)
    except (sf.LibsndfileError, RuntimeError, OSError) as e:
        raise DecodeFailureError(str(name), str(e)) from e

    if data.shape[0] == 0:
        raise DecodeFailureError(str(name), "file contains no samples")

    logger.debug(
        f"Decoded {name}: channels={data.shape[1]}, sample_rate={sample_rate}, "
        f"length={data.shape[0]}"
    )
    return AudioBuffer([data[:, ch] for ch in range(data.shape[1])], sample_rate)


def write_wav(
    destination: str | Path | BinaryIO, buffer: AudioBuffer, subtype: str = "PCM_16"
) -> None:
    """Write a buffer as a WAV file.

    Args:
        destination: File path or binary file-like object
        buffer: Audio to write
        subtype: libsndfile subtype (default: 16-bit PCM)

    Raises:
        EncodeFailureError: If the destination cannot be opened or written
    """
    name = (
        str(destination)
        if isinstance(destination, (str, Path))
        else getattr(destination, "name", "<stream>")
    )
    frames = np.stack(buffer.channel_data, axis=1)

    try:
        sf.write(destination, frames, buffer.sample_rate, subtype=subtype, format="WAV")
    except (sf.LibsndfileError, RuntimeError, OSError) as e:
        raise EncodeFailureError(str(name), str(e)) from e

    logger.debug(f"Wrote {buffer!r} as WAV {subtype}")
