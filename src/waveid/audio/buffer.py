"""Immutable multi-channel audio buffer.

AudioBuffer is the value exchanged between the audio collaborators (file
readers, audio contexts) and the codec pipeline. It mirrors the shape of a
decoded audio clip: a sample rate plus one float array per channel.

Design:
    Each stage receives a buffer read-only and returns a new one. Channel
    arrays are copied on construction and flagged non-writeable, so no two
    stages share mutable state.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import InvalidCanonicalFormError


@dataclass(frozen=True, init=False, eq=False)
class AudioBuffer:
    """Audio samples with sample rate metadata.

    Attributes:
        sample_rate: Sample rate in Hz
        channel_data: One float64 array per channel, all the same length

    Example:
        ```python
        left = np.zeros(480)
        right = np.ones(480)
        buffer = AudioBuffer([left, right], sample_rate=48000)
        assert buffer.channels == 2
        assert buffer.length == 480
        ```
    """

    sample_rate: int
    channel_data: tuple[NDArray[np.float64], ...]

    def __init__(self, channel_data: Sequence[ArrayLike], sample_rate: int) -> None:
        """Initialize audio buffer.

        Args:
            channel_data: Per-channel sample arrays
            sample_rate: Sample rate in Hz

        Raises:
            InvalidCanonicalFormError: If the rate is not positive, no channel
                is given, a channel is not one-dimensional, or channel lengths differ
        """
        if sample_rate <= 0:
            raise InvalidCanonicalFormError("sample_rate", "> 0", sample_rate)
        if len(channel_data) == 0:
            raise InvalidCanonicalFormError("channels", ">= 1", 0)

        channels: list[NDArray[np.float64]] = []
        for data in channel_data:
            array = np.array(data, dtype=np.float64)
            if array.ndim != 1:
                raise InvalidCanonicalFormError(
                    "samples", "1-D channel array", f"{array.ndim}-D array"
                )
            array.flags.writeable = False
            channels.append(array)

        lengths = {len(c) for c in channels}
        if len(lengths) != 1:
            raise InvalidCanonicalFormError(
                "length", "equal channel lengths", sorted(lengths)
            )

        object.__setattr__(self, "sample_rate", int(sample_rate))
        object.__setattr__(self, "channel_data", tuple(channels))

    @classmethod
    def mono(cls, samples: ArrayLike, sample_rate: int) -> "AudioBuffer":
        """Create a single-channel buffer."""
        return cls([samples], sample_rate)

    @property
    def channels(self) -> int:
        return len(self.channel_data)

    @property
    def length(self) -> int:
        """Number of samples per channel."""
        return len(self.channel_data[0])

    @property
    def duration_s(self) -> float:
        return self.length / self.sample_rate

    def get_channel_data(self, index: int) -> NDArray[np.float64]:
        """Return the read-only samples of one channel.

        Raises:
            IndexError: If the channel does not exist
        """
        if not 0 <= index < self.channels:
            raise IndexError(f"Channel {index} out of range for {self.channels}-channel buffer")
        return self.channel_data[index]

    def __repr__(self) -> str:
        return (
            f"AudioBuffer(channels={self.channels}, sample_rate={self.sample_rate}, "
            f"length={self.length})"
        )
