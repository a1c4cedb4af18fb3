from casepaper.config.settings import Settings
from casepaper.ocr.base import BaseOcrClient
from casepaper.ocr.example_ocr_adapter import ExampleOcrAdapter
from casepaper.ocr.google_vision_adapter import GoogleVisionAdapter


class OcrClientFactory:
    """Creates the configured OCR adapter."""

    PROVIDERS: tuple[str, ...] = ("google_vision", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrClient:
        provider = settings.ocr_provider.lower()
        if provider == "google_vision":
            return GoogleVisionAdapter(
                api_key=settings.ocr_google_api_key,
                endpoint=settings.ocr_google_endpoint,
                timeout_seconds=settings.ocr_timeout_seconds,
            )
        if provider == "example":
            return ExampleOcrAdapter()
        raise ValueError(f"Unknown OCR provider '{provider}'. Choose from: {list(cls.PROVIDERS)}")
