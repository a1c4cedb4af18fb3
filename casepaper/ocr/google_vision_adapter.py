from typing import Any

import httpx

from casepaper.ocr.base import BaseOcrClient
from casepaper.ocr.exceptions import OcrError, OcrNetworkError


class GoogleVisionAdapter(BaseOcrClient):
    """OCR through the Google Cloud Vision images:annotate endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("ocr_google_api_key is required for ocr_provider=google_vision")
        self._api_key = api_key
        self._endpoint = endpoint
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    def recognize_text(self, image_base64: str) -> str:
        payload = {
            "requests": [
                {
                    "image": {"content": image_base64},
                    "features": [{"type": "TEXT_DETECTION", "maxResults": 1}],
                }
            ]
        }
        try:
            response = self._client.post(
                self._endpoint,
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.HTTPError as exc:
            raise OcrNetworkError(f"Vision API network error: {exc}") from exc

        try:
            data: dict[str, Any] = response.json()
        except ValueError as exc:
            raise OcrError(
                f"Vision API returned non-JSON response (HTTP {response.status_code})"
            ) from exc

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise OcrError(f"Vision API error: {message}")
        if response.is_error:
            raise OcrError(f"Vision API call failed: HTTP {response.status_code}")

        responses = data.get("responses") or [{}]
        first = responses[0] if isinstance(responses[0], dict) else {}
        if first.get("error"):
            raise OcrError(f"Vision API error: {first['error'].get('message', first['error'])}")
        annotation = first.get("fullTextAnnotation") or {}
        return str(annotation.get("text") or "")
