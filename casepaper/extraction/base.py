from abc import ABC, abstractmethod

from casepaper.extraction.models import StructuredData


class BaseStructuredExtractor(ABC):
    """Contract for structured medical extractors."""

    @abstractmethod
    def extract(self, clinical_text: str) -> StructuredData:
        """Decompose normalized clinical text into typed encounter fields.

        Empty fields are a valid outcome.

        Raises:
            StructuredExtractionError: when the provider call fails.
        """
