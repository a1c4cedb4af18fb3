import base64
import re

from casepaper.logging.logger import Log
from casepaper.ocr.base import BaseOcrClient
from casepaper.ocr.exceptions import EmptyExtractionError

_DATA_URL_PREFIX = re.compile(r"^data:[^;]+;base64,")


def encode_image(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode("ascii")


class TextExtractor:
    """Text extraction stage: one OCR call per image, empty text is a failure."""

    def __init__(self, ocr_client: BaseOcrClient) -> None:
        self._ocr_client = ocr_client

    def extract(self, image_base64: str) -> str:
        """Return the raw text recognized in the image.

        Raises:
            EmptyExtractionError: if the provider returns blank text.
            OcrError: if the provider call fails.
        """
        content = _DATA_URL_PREFIX.sub("", image_base64.strip())
        raw_text = self._ocr_client.recognize_text(content)
        if not raw_text.strip():
            raise EmptyExtractionError("No text could be extracted from the image")
        Log.info(f"OCR extracted {len(raw_text)} chars")
        return raw_text
