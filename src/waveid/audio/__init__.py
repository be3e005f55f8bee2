"""Audio collaborators for waveid.

This module provides the audio buffer type, band-limited resampling, the
injectable offline audio context, and soundfile-based file I/O.
"""

from .buffer import AudioBuffer
from .context import AudioContext, OfflineAudioContext
from .resampling import resample_audio, resampled_length
from .wavfile import read_audio, write_wav

__all__ = [
    "AudioBuffer",
    "AudioContext",
    "OfflineAudioContext",
    "resample_audio",
    "resampled_length",
    "read_audio",
    "write_wav",
]
