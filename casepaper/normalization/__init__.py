from casepaper.normalization.base import BaseNormalizer
from casepaper.normalization.models import NO_MEDICAL_CONTENT, NormalizedText
from casepaper.normalization.normalizer import ClinicalTextNormalizer

__all__ = ["BaseNormalizer", "ClinicalTextNormalizer", "NO_MEDICAL_CONTENT", "NormalizedText"]
