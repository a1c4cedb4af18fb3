import io

import pdfplumber

from casepaper.pdf.base import BasePdfRasterizer
from casepaper.pdf.exceptions import PdfRasterizationError


class PdfPlumberAdapter(BasePdfRasterizer):
    """Renders PDF pages using pdfplumber."""

    def render_first_page(self, pdf_bytes: bytes) -> bytes:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                if not pdf.pages:
                    raise PdfRasterizationError("PDF has no pages")
                image = pdf.pages[0].to_image(resolution=self._dpi)
                buf = io.BytesIO()
                image.save(buf, format="PNG")
            return buf.getvalue()
        except PdfRasterizationError:
            raise
        except Exception as exc:
            raise PdfRasterizationError(f"pdfplumber rendering failed: {exc}") from exc
