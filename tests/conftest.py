import io

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page scanned-style case paper PDF."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 760, "City Care Clinic")
    c.drawString(72, 740, "C/o fever since 2 days")
    c.drawString(72, 720, "Dx: Viral fever")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF; only page one is a case paper."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.drawString(72, 760, "Rx: Tab Paracetamol 500mg TID")
    c.showPage()
    c.drawString(72, 760, "Billing summary")
    c.save()
    return buf.getvalue()
