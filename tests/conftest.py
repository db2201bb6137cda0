"""Общие фикстуры: синтетические сигналы."""

import numpy as np
import pytest


def make_sine(freq: float, sr: int, duration: float, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(int(sr * duration)) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


@pytest.fixture
def pure_sine():
    """Синус 150 Гц, 1 секунда, 44100 Гц."""
    sr = 44100
    return make_sine(150.0, sr, 1.0), sr


@pytest.fixture
def silence():
    sr = 16000
    return np.zeros(sr, dtype=np.float32), sr


@pytest.fixture
def white_noise():
    rng = np.random.default_rng(42)
    sr = 16000
    return rng.normal(0, 0.1, sr).astype(np.float32), sr


@pytest.fixture
def sine():
    """Фабрика синусоид: sine(freq, sr, duration)."""
    return make_sine
