"""Shared fixtures for waveid unit tests."""

from collections.abc import Iterator

import numpy as np
import pytest
from numpy.typing import NDArray

from waveid.audio.context import OfflineAudioContext
from waveid.config import CanonicalFormConfig, WaveIdConfig


@pytest.fixture
def context() -> Iterator[OfflineAudioContext]:
    """Offline audio context, closed after the test."""
    ctx = OfflineAudioContext()
    yield ctx
    ctx.close()


@pytest.fixture
def small_config() -> WaveIdConfig:
    """Configuration with a short canonical form (8 samples @ 8kHz)."""
    return WaveIdConfig(canonical=CanonicalFormConfig(target_sample_rate=8000, sample_count=8))


@pytest.fixture
def sine_wave_44k() -> NDArray[np.float64]:
    """Generate 1kHz sine wave at 44100Hz (1s duration, amplitude 0.5).

    Returns:
        44100 float64 samples
    """
    sample_rate = 44100
    t = np.arange(sample_rate) / sample_rate
    return 0.5 * np.sin(2 * np.pi * 1000 * t)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(1234)
