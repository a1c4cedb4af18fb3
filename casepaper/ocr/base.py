from abc import ABC, abstractmethod


class BaseOcrClient(ABC):
    """Contract for OCR provider adapters."""

    @abstractmethod
    def recognize_text(self, image_base64: str) -> str:
        """Recognize text in a base64-encoded image.

        Args:
            image_base64: Image content, base64 without a data-URL prefix.

        Returns:
            The full recognized text; may be empty.

        Raises:
            OcrNetworkError: transport failure or timeout.
            OcrError: the provider reported an error.
        """
