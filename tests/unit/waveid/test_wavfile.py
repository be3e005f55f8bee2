"""Unit tests for the soundfile-based audio file collaborator."""

import io
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from waveid.audio.buffer import AudioBuffer
from waveid.audio.wavfile import read_audio, write_wav
from waveid.errors import DecodeFailureError, EncodeFailureError


def test_write_then_read_mono(tmp_path: Path) -> None:
    """Test a PCM_16 WAV keeps rate, length and samples to 16-bit precision."""
    samples = np.array([0.0, 0.5, -0.5, 1.0, -1.0, 0.123])
    buffer = AudioBuffer.mono(samples, 48000)
    path = tmp_path / "clip.wav"

    write_wav(path, buffer)
    loaded = read_audio(path)

    assert loaded.channels == 1
    assert loaded.sample_rate == 48000
    assert loaded.length == 6
    assert np.allclose(loaded.get_channel_data(0), samples, atol=2 / 32768)
    assert sf.info(str(path)).subtype == "PCM_16"


def test_read_stereo(tmp_path: Path) -> None:
    """Test stereo files decode into two channel arrays."""
    frames = np.stack([np.full(100, 0.5), np.full(100, -0.25)], axis=1)
    path = tmp_path / "stereo.wav"
    sf.write(path, frames, 44100, subtype="PCM_16")

    buffer = read_audio(path)

    assert buffer.channels == 2
    assert buffer.sample_rate == 44100
    assert np.allclose(buffer.get_channel_data(0), 0.5, atol=1e-3)
    assert np.allclose(buffer.get_channel_data(1), -0.25, atol=1e-3)


def test_read_from_file_object() -> None:
    """Test decoding from an in-memory stream."""
    stream = io.BytesIO()
    sf.write(stream, np.zeros(64), 16000, format="WAV", subtype="PCM_16")
    stream.seek(0)

    buffer = read_audio(stream)

    assert buffer.sample_rate == 16000
    assert buffer.length == 64


def test_write_to_file_object() -> None:
    """Test writing into an in-memory stream."""
    stream = io.BytesIO()
    write_wav(stream, AudioBuffer.mono(np.zeros(32), 48000))

    assert stream.getvalue()[:4] == b"RIFF"


def test_write_into_missing_directory(tmp_path: Path) -> None:
    """Test an unwritable destination is an encode failure naming it."""
    path = tmp_path / "no_such_dir" / "out.wav"

    with pytest.raises(EncodeFailureError) as exc_info:
        write_wav(path, AudioBuffer.mono(np.zeros(32), 48000))

    assert exc_info.value.destination == str(path)
    assert not path.exists()


def test_missing_file(tmp_path: Path) -> None:
    """Test a missing file is a decode failure naming the source."""
    path = tmp_path / "missing.wav"

    with pytest.raises(DecodeFailureError) as exc_info:
        read_audio(path)

    assert exc_info.value.source == str(path)


def test_garbage_file(tmp_path: Path) -> None:
    """Test bytes that are not audio are a decode failure."""
    path = tmp_path / "not_audio.wav"
    path.write_bytes(b"definitely not a wav file" * 10)

    with pytest.raises(DecodeFailureError):
        read_audio(path)


def test_empty_audio_file(tmp_path: Path) -> None:
    """Test a valid file with no samples is a decode failure."""
    path = tmp_path / "empty.wav"
    sf.write(path, np.zeros(0), 48000, subtype="PCM_16")

    with pytest.raises(DecodeFailureError, match="no samples"):
        read_audio(path)
