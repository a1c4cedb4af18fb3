from casepaper.ocr.base import BaseOcrClient


class ExampleOcrAdapter(BaseOcrClient):
    """Offline OCR adapter returning a fixed case paper, for local smoke runs."""

    SAMPLE_TEXT = (
        "City Care Clinic, MG Road. Ph: 98450 00000\n"
        "C/o fever since 2 days, body ache\n"
        "T: 101 F  BP: 120/80  P: 92/min\n"
        "Dx: Viral fever\n"
        "Rx: Tab Paracetamol 500mg TID x 3 days after food\n"
        "Adv: plenty of fluids, CBC if fever persists"
    )

    def recognize_text(self, image_base64: str) -> str:
        _ = image_base64
        return self.SAMPLE_TEXT
