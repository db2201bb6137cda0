"""
Спектральный анализ на основе БПФ.

Разложение энергии на гармоническую и шумовую части (HNR, NHR)
и разброс спектра мощности (spread1, spread2). План БПФ создаётся
на время одного вызова анализатора и освобождается на любом выходе.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

import numpy as np
import scipy.fft

from tremor_check.constants import HARMONIC_BIN_START, HARMONIC_BIN_STOP
from tremor_check.exceptions import FFTSetupError
from tremor_check.log import setup_logger

log = setup_logger('spectral')


class FFTPlan:
    """План вещественного БПФ радикса 2 с собственным рабочим буфером."""

    def __init__(self, size: int):
        self.size = size
        self._workspace: Optional[np.ndarray] = np.zeros(size, dtype=np.float64)

    @property
    def released(self) -> bool:
        return self._workspace is None

    def magnitudes_squared(self, y: np.ndarray) -> np.ndarray:
        """
        Квадраты модулей спектра первых `size` отсчётов сигнала.

        Более длинный сигнал усекается до размера плана.

        Returns:
            Массив длиной size // 2 + 1 (от постоянной составляющей до Найквиста)
        """
        if self._workspace is None:
            raise FFTSetupError('План БПФ уже освобождён')
        if len(y) < self.size:
            raise FFTSetupError(
                f'Сигнал короче плана БПФ: {len(y)} < {self.size}'
            )

        self._workspace[:] = y[:self.size]
        spectrum = scipy.fft.rfft(self._workspace, overwrite_x=True)
        return spectrum.real ** 2 + spectrum.imag ** 2

    def release(self) -> None:
        self._workspace = None


@contextmanager
def fft_plan(n_samples: int, workers: int = 1) -> Iterator[FFTPlan]:
    """
    Создаёт план БПФ размера 2**floor(log2(n_samples)).

    Args:
        n_samples: Длина сигнала
        workers: Количество потоков scipy.fft

    Yields:
        FFTPlan, освобождаемый при выходе из блока

    Raises:
        FFTSetupError: Если сигнал короче двух отсчётов
    """
    if n_samples < 2:
        raise FFTSetupError(f'Недостаточно отсчётов для БПФ: {n_samples}')

    plan = FFTPlan(1 << (int(n_samples).bit_length() - 1))
    try:
        with scipy.fft.set_workers(workers):
            yield plan
    finally:
        plan.release()


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


# ──────────────── Гармоники и шум ────────────────

@dataclass(frozen=True)
class SpectralEnergy:
    """Разложение энергии сигнала."""

    harmonic: float
    noise: float
    total: float

    @property
    def is_degenerate(self) -> bool:
        """Отношения не определены, если одна из энергий нулевая."""
        return self.harmonic == 0 or self.noise == 0


def harmonic_energy(y: np.ndarray, workers: int = 1) -> float:
    """
    Сумма квадратов модулей спектра в бинах 1..9.

    Грубое приближение гармонической энергии: самые низкие
    ненулевые бины, без отслеживания реальных гармоник.

    Raises:
        FFTSetupError: Если план БПФ не может быть создан
    """
    y = np.asarray(y, dtype=np.float64)
    with fft_plan(len(y), workers) as plan:
        magnitudes = plan.magnitudes_squared(y)
    return float(np.sum(magnitudes[HARMONIC_BIN_START:HARMONIC_BIN_STOP]))


def noise_energy(y: np.ndarray, harmonic: float) -> float:
    """Полная энергия сигнала за вычетом гармонической, не меньше нуля."""
    y = np.asarray(y, dtype=np.float64)
    return max(float(np.sum(y ** 2)) - harmonic, 0.0)


def decompose_energy(y: np.ndarray, workers: int = 1) -> SpectralEnergy:
    """
    Раскладывает энергию сигнала на гармоническую и шумовую части.

    Ошибка создания плана БПФ не фатальна: гармоническая энергия
    считается нулевой, и разложение становится вырожденным.

    Args:
        y: Аудиосигнал
        workers: Количество потоков scipy.fft

    Returns:
        SpectralEnergy с гармонической, шумовой и полной энергией
    """
    y = np.asarray(y, dtype=np.float64)
    total = float(np.sum(y ** 2))

    try:
        harmonic = harmonic_energy(y, workers)
    except FFTSetupError as e:
        log.warning('Гармоническая энергия не вычислена: %s', e)
        harmonic = 0.0

    return SpectralEnergy(
        harmonic=harmonic,
        noise=noise_energy(y, harmonic),
        total=total,
    )


def harmonic_ratios(y: np.ndarray, workers: int = 1) -> Optional[tuple[float, float]]:
    """
    Вычисляет HNR (дБ) и NHR.

    Args:
        y: Аудиосигнал
        workers: Количество потоков scipy.fft

    Returns:
        (hnr, nhr) или None, если гармоническая или шумовая энергия нулевая
    """
    energy = decompose_energy(y, workers)
    if energy.is_degenerate:
        log.warning(
            'Вырожденное отношение энергий (гармоники=%.3g, шум=%.3g), HNR/NHR не определены',
            energy.harmonic, energy.noise,
        )
        return None

    hnr = 10 * np.log10(energy.harmonic / energy.noise)
    nhr = energy.noise / energy.harmonic
    return float(hnr), float(nhr)


# ──────────────── Разброс спектра ────────────────

def power_spectrum(y: np.ndarray, workers: int = 1) -> np.ndarray:
    """
    Спектр мощности: квадраты модулей, делённые на длину сигнала.

    Raises:
        FFTSetupError: Если длина сигнала не степень двойки или меньше двух
    """
    y = np.asarray(y, dtype=np.float64)
    n = len(y)
    if not is_power_of_two(n):
        raise FFTSetupError(f'Длина сигнала не степень двойки: {n}')

    with fft_plan(n, workers) as plan:
        magnitudes = plan.magnitudes_squared(y)
    return magnitudes / n


def spread_values(y: np.ndarray, workers: int = 1) -> Optional[tuple[float, float]]:
    """
    Разброс спектра мощности.

    spread1 — стандартное отклонение спектра мощности,
    spread2 — его среднее значение.

    Args:
        y: Аудиосигнал длиной в степень двойки
        workers: Количество потоков scipy.fft

    Returns:
        (spread1, spread2) или None, если длина не степень двойки
    """
    n = len(y)
    if not is_power_of_two(n):
        log.debug('Длина сигнала %d не степень двойки, разброс спектра не вычисляется', n)
        return None

    try:
        spectrum = power_spectrum(y, workers)
    except FFTSetupError as e:
        log.warning('Разброс спектра не вычислен: %s', e)
        return None

    return float(np.std(spectrum)), float(np.mean(spectrum))


def calculate_spread(y: np.ndarray, workers: int = 1) -> tuple[float, float]:
    """То же, что spread_values, но (0.0, 0.0) вместо None."""
    return spread_values(y, workers) or (0.0, 0.0)
