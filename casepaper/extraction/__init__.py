from casepaper.extraction.base import BaseStructuredExtractor
from casepaper.extraction.extractor import StructuredMedicalExtractor
from casepaper.extraction.models import Prescription, StructuredData, TestOrder, Vitals

__all__ = [
    "BaseStructuredExtractor",
    "Prescription",
    "StructuredData",
    "StructuredMedicalExtractor",
    "TestOrder",
    "Vitals",
]
