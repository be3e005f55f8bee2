"""Unit tests for the offline audio context and AudioBuffer."""

import threading

import numpy as np
import pytest

from waveid.audio.buffer import AudioBuffer
from waveid.audio.context import OfflineAudioContext
from waveid.errors import AudioContextClosedError, InvalidCanonicalFormError


def test_buffer_properties() -> None:
    """Test derived channel count, length and duration."""
    buffer = AudioBuffer([np.zeros(24000), np.ones(24000)], 48000)

    assert buffer.channels == 2
    assert buffer.length == 24000
    assert buffer.sample_rate == 48000
    assert buffer.duration_s == pytest.approx(0.5)
    assert np.all(buffer.get_channel_data(1) == 1.0)
    assert repr(buffer) == "AudioBuffer(channels=2, sample_rate=48000, length=24000)"


def test_buffer_is_read_only_copy() -> None:
    """Test the buffer copies its input and cannot be mutated."""
    samples = np.zeros(10)
    buffer = AudioBuffer.mono(samples, 8000)

    samples[0] = 1.0
    assert buffer.get_channel_data(0)[0] == 0.0

    with pytest.raises(ValueError):
        buffer.get_channel_data(0)[0] = 1.0


def test_buffer_validation() -> None:
    """Test invalid buffers are rejected."""
    with pytest.raises(InvalidCanonicalFormError, match="sample_rate"):
        AudioBuffer.mono(np.zeros(4), 0)
    with pytest.raises(InvalidCanonicalFormError, match="channels"):
        AudioBuffer([], 48000)
    with pytest.raises(InvalidCanonicalFormError, match="equal channel lengths"):
        AudioBuffer([np.zeros(4), np.zeros(5)], 48000)
    with pytest.raises(InvalidCanonicalFormError, match="1-D"):
        AudioBuffer([np.zeros((2, 2))], 48000)


def test_buffer_channel_index() -> None:
    """Test out-of-range channel access raises IndexError."""
    buffer = AudioBuffer.mono(np.zeros(4), 8000)

    with pytest.raises(IndexError):
        buffer.get_channel_data(1)


def test_context_resample_all_channels() -> None:
    """Test every channel is rendered at the new rate."""
    buffer = AudioBuffer([np.ones(441), np.zeros(441)], 44100)

    with OfflineAudioContext() as context:
        result = context.resample(buffer, 48000)

    assert result.channels == 2
    assert result.sample_rate == 48000
    assert result.length == 480
    assert context.render_count == 1


def test_context_same_rate_is_no_op(context: OfflineAudioContext) -> None:
    """Test same-rate resample returns the input buffer without rendering."""
    buffer = AudioBuffer.mono(np.zeros(480), 48000)

    assert context.resample(buffer, 48000) is buffer
    assert context.render_count == 0


def test_context_create_buffer(context: OfflineAudioContext) -> None:
    """Test buffers created by the context hold the given samples."""
    buffer = context.create_buffer([[0.5, -0.5]], 48000)

    assert buffer.channels == 1
    assert buffer.get_channel_data(0).tolist() == [0.5, -0.5]


def test_context_closed() -> None:
    """Test a closed context refuses work, and close is idempotent."""
    context = OfflineAudioContext()
    context.close()
    context.close()

    assert context.closed is True
    with pytest.raises(AudioContextClosedError):
        context.resample(AudioBuffer.mono(np.zeros(10), 44100), 48000)
    with pytest.raises(AudioContextClosedError):
        context.create_buffer([[0.0]], 48000)


def test_context_manager_closes() -> None:
    """Test leaving the with-block closes the context."""
    with OfflineAudioContext() as context:
        assert context.closed is False

    assert context.closed is True


def test_context_serializes_concurrent_renders(context: OfflineAudioContext) -> None:
    """Test concurrent renders on one context all complete without interleaving."""
    buffer = AudioBuffer.mono(np.random.default_rng(0).uniform(-1, 1, 22050), 22050)
    results: list[AudioBuffer] = []
    lock = threading.Lock()

    def render() -> None:
        out = context.resample(buffer, 48000)
        with lock:
            results.append(out)

    threads = [threading.Thread(target=render) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert context.render_count == 4
    assert len(results) == 4
    for result in results[1:]:
        assert np.array_equal(result.get_channel_data(0), results[0].get_channel_data(0))
