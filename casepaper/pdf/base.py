from abc import ABC, abstractmethod


class BasePdfRasterizer(ABC):
    """Contract for all PDF rasterization adapters."""

    def __init__(self, dpi: int = 200) -> None:
        self._dpi = dpi

    @abstractmethod
    def render_first_page(self, pdf_bytes: bytes) -> bytes:
        """Render the first page of a PDF to PNG.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            PNG image bytes of page one.

        Raises:
            PdfRasterizationError: if rendering fails or the PDF has no pages.
        """
