"""waveid: map a one-second mono waveform to a single integer and back.

Audio is canonicalized (mono, fixed rate, fixed length), peak-normalized to
16-bit integers, and packed as the digits of a base-65536 number.
"""

from .audio import AudioBuffer, AudioContext, OfflineAudioContext, read_audio, write_wav
from .canonicalize import canonicalize, downmix
from .codec import decode_identifier, encode_samples, format_identifier, parse_identifier
from .config import WaveIdConfig
from .constants import RADIX, identifier_upper_bound
from .errors import (
    AudioContextClosedError,
    DecodeFailureError,
    EncodeFailureError,
    IdentifierOutOfRangeError,
    InvalidCanonicalFormError,
    InvalidIdentifierError,
    UnsupportedChannelLayoutError,
    WaveIdError,
)
from .normalize import normalize_peak
from .pipeline import audio_to_identifier, identifier_to_audio, random_identifier
from .reconstruct import reconstruct_waveform

__version__ = "0.1.0"

__all__ = [
    "AudioBuffer",
    "AudioContext",
    "OfflineAudioContext",
    "read_audio",
    "write_wav",
    "canonicalize",
    "downmix",
    "encode_samples",
    "decode_identifier",
    "parse_identifier",
    "format_identifier",
    "WaveIdConfig",
    "RADIX",
    "identifier_upper_bound",
    "WaveIdError",
    "UnsupportedChannelLayoutError",
    "InvalidCanonicalFormError",
    "DecodeFailureError",
    "EncodeFailureError",
    "IdentifierOutOfRangeError",
    "InvalidIdentifierError",
    "AudioContextClosedError",
    "normalize_peak",
    "audio_to_identifier",
    "identifier_to_audio",
    "random_identifier",
    "reconstruct_waveform",
]
