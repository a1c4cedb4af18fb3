from dataclasses import dataclass

NO_MEDICAL_CONTENT = "No medical content detected"


@dataclass(frozen=True)
class NormalizedText:
    """Clinically filtered text produced from raw OCR output."""

    text: str
    original_length: int = 0

    @property
    def has_clinical_content(self) -> bool:
        return self.text.strip().rstrip(".") != NO_MEDICAL_CONTENT

    @property
    def removed_chars(self) -> int:
        return max(0, self.original_length - len(self.text))
