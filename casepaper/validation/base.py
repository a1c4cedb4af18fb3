from abc import ABC, abstractmethod

from casepaper.extraction.models import StructuredData
from casepaper.validation.models import ValidationOutcome


class BaseExtractionValidator(ABC):
    """Contract for validation/refinement adapters."""

    @abstractmethod
    def validate(
        self,
        structured_data: StructuredData,
        raw_text: str,
        normalized_text: str,
    ) -> ValidationOutcome:
        """Cross-check extracted fields against the source texts.

        Returns:
            ValidationOutcome with the refined data and a report of every
            change made.

        Raises:
            ValidationStageError: on any failure.
        """
