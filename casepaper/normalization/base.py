from abc import ABC, abstractmethod

from casepaper.normalization.models import NormalizedText


class BaseNormalizer(ABC):
    """Contract for all clinical text normalizers."""

    @abstractmethod
    def normalize(self, raw_text: str) -> NormalizedText:
        """Strip non-clinical content from raw OCR text.

        Args:
            raw_text: Unstructured text from the text extraction stage.

        Returns:
            NormalizedText holding only clinical content, or the
            no-medical-content sentinel.

        Raises:
            NormalizationFailedError: on any failure, including empty output.
        """
