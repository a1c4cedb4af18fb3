import pymupdf

from casepaper.pdf.base import BasePdfRasterizer
from casepaper.pdf.exceptions import PdfRasterizationError


class PyMuPdfAdapter(BasePdfRasterizer):
    """Renders PDF pages using PyMuPDF."""

    def render_first_page(self, pdf_bytes: bytes) -> bytes:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise PdfRasterizationError("PDF has no pages")
                pixmap = doc[0].get_pixmap(dpi=self._dpi)
                return pixmap.tobytes("png")
        except PdfRasterizationError:
            raise
        except Exception as exc:
            raise PdfRasterizationError(f"pymupdf rendering failed: {exc}") from exc
