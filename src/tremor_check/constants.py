"""Все константы проекта tremor_check.

Единственный источник правды для числовых параметров,
порогов, диапазонов и имён метрик.
"""

from pathlib import Path

# ── Пути ─────────────────────────────────────────

LOGS_DIR = Path('logs')

# ── Аудио ────────────────────────────────────────
SUPPORTED_EXTENSIONS = frozenset(
    {'.wav', '.m4a', '.caf', '.aiff', '.flac', '.mp3', '.ogg'},
)

# ── Сегментация на фреймы ────────────────────────
FRAME_DURATION_S = 0.03
FRAME_OVERLAP = 0.5

# ── Основной тон (F0) ────────────────────────────
PITCH_FMIN = 50.0
PITCH_FMAX = 500.0
AUTOCORR_THRESHOLD = 0.2

# ── Отбраковка выбросов ──────────────────────────
OUTLIER_MIN_COUNT = 4
OUTLIER_IQR_FACTOR = 1.5

# ── Амплитудные пики ─────────────────────────────
PEAK_WINDOWS_PER_SECOND = 100

# ── Спектральный анализ ──────────────────────────
HARMONIC_BIN_START = 1
HARMONIC_BIN_STOP = 10

# ── Энтропия периода основного тона ──────────────
PPE_BINS = 10

# ── Нелинейная динамика ──────────────────────────
EMBEDDING_DIMENSION = 2
EMBEDDING_DELAY = 1
RPDE_RADIUS = 0.2
D2_EPSILON_RATIO = 0.1
DFA_MIN_WINDOW = 4
DFA_WINDOW_COUNT = 20
NONLINEAR_MAX_POINTS = 2_000

# ── Скрининг тремора по нескольким фразам ────────
# Средний джиттер и шиммер, %; признак выставляется при строгом превышении
JITTER_TREMOR_THRESHOLD = 20.0
SHIMMER_TREMOR_THRESHOLD = 25.0

# ── Имена метрик ─────────────────────────────────
DEFAULT_METRICS: tuple[str, ...] = (
    'jitter_percent',
    'jitter_abs',
    'rap',
    'ppq',
    'shimmer_percent',
    'spread1',
    'spread2',
    'hnr',
    'nhr',
    'ppe',
    'f0_mean',
    'f0_max',
    'f0_min',
)
EXTENDED_METRICS: tuple[str, ...] = (
    'ddp',
    'apq3',
    'apq5',
    'dda',
    'shimmer_db',
    'shimmer_pairwise',
)
NONLINEAR_METRICS: tuple[str, ...] = (
    'dfa',
    'rpde',
    'd2',
)

