"""
tremor_check — извлечение показателей качества голоса,
связанных с голосовым тремором.
"""

from tremor_check.exceptions import (
    FFTSetupError,
    InvalidSignalError,
    SourceUnavailableError,
    TremorCheckError,
)
from tremor_check.pipeline import FeatureResult, extract_features, extract_features_from_file
from tremor_check.screening import TremorAssessment, assess_phrases

__version__ = "0.1.0"
__all__ = [
    "FeatureResult",
    "extract_features",
    "extract_features_from_file",
    "TremorAssessment",
    "assess_phrases",
    "TremorCheckError",
    "SourceUnavailableError",
    "FFTSetupError",
    "InvalidSignalError",
]
