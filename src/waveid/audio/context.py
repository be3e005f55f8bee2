"""Audio processing contexts.

An audio context owns the rendering resources used by the canonicalizer
(resampling) and the waveform reconstructor (buffer creation). Contexts are
created explicitly, passed into the pipeline, and closed after use, so there
is no process-wide audio engine.

Key design principles:
- Protocol-based interface for structural typing
- One render at a time per context instance
- Explicit lifecycle (create, use, close)
"""

import logging
import threading
from collections.abc import Sequence
from types import TracebackType
from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike

from ..errors import AudioContextClosedError
from .buffer import AudioBuffer
from .resampling import resample_audio

logger = logging.getLogger(__name__)


class AudioContext(Protocol):
    """Protocol defining the audio context interface used by the pipeline."""

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        ...

    def resample(self, buffer: AudioBuffer, target_rate: int) -> AudioBuffer:
        """Render the buffer at a new sample rate.

        Blocks until the whole buffer is rendered; no partial results.

        Args:
            buffer: Input audio
            target_rate: Output sample rate in Hz

        Returns:
            Fully rendered buffer at target_rate, same channel count
        """
        ...

    def create_buffer(self, channel_data: Sequence[ArrayLike], sample_rate: int) -> AudioBuffer:
        """Create a buffer owned by the caller.

        Args:
            channel_data: Per-channel sample arrays
            sample_rate: Sample rate in Hz
        """
        ...

    def close(self) -> None:
        """Release the context. Further use raises AudioContextClosedError."""
        ...


class OfflineAudioContext:
    """Offline (render-to-completion) audio context backed by scipy.

    Thread-safety: renders on the same instance are serialized with a lock,
    so two callers never interleave on one context.

    Example:
        ```python
        with OfflineAudioContext() as context:
            buffer_48k = context.resample(buffer_44k, 48000)
        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._closed = False
        self._render_count = 0
        logger.debug("Audio context created")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def render_count(self) -> int:
        """Number of completed resample renders."""
        return self._render_count

    def resample(self, buffer: AudioBuffer, target_rate: int) -> AudioBuffer:
        """Resample every channel of the buffer to target_rate.

        Raises:
            AudioContextClosedError: If the context was closed
            ValueError: If target_rate is not positive
        """
        with self._lock:
            self._ensure_open()
            if buffer.sample_rate == target_rate:
                return buffer

            channels = [
                resample_audio(data, buffer.sample_rate, target_rate)
                for data in buffer.channel_data
            ]
            self._render_count += 1

            logger.debug(
                f"Rendered {buffer.channels}ch {buffer.length} samples: "
                f"{buffer.sample_rate}Hz → {target_rate}Hz ({len(channels[0])} samples)"
            )
            return AudioBuffer(channels, target_rate)

    def create_buffer(self, channel_data: Sequence[ArrayLike], sample_rate: int) -> AudioBuffer:
        """Create a new buffer from per-channel samples.

        Raises:
            AudioContextClosedError: If the context was closed
        """
        self._ensure_open()
        return AudioBuffer([np.asarray(c, dtype=np.float64) for c in channel_data], sample_rate)

    def close(self) -> None:
        """Close the context. Closing twice is a no-op."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.debug(f"Audio context closed after {self._render_count} renders")

    def _ensure_open(self) -> None:
        if self._closed:
            raise AudioContextClosedError("Audio context is closed")

    def __enter__(self) -> "OfflineAudioContext":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
