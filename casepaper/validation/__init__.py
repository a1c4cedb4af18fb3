from casepaper.validation.base import BaseExtractionValidator
from casepaper.validation.factory import ValidatorFactory
from casepaper.validation.models import FieldChange, ValidationOutcome, ValidationReport

__all__ = [
    "BaseExtractionValidator",
    "FieldChange",
    "ValidationOutcome",
    "ValidationReport",
    "ValidatorFactory",
]
