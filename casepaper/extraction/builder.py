"""Coerces loosely-shaped extraction JSON into a StructuredData record.

Providers drift from the requested schema in small ways (objects where
strings were asked for, numbers for vitals, missing keys). Items that can be
salvaged are kept; items that cannot are dropped. Only a payload that is not
a JSON object at all is rejected.
"""

from typing import Any

from casepaper.extraction.exceptions import StructuredExtractionError
from casepaper.extraction.models import Prescription, StructuredData, TestOrder, Vitals
from casepaper.logging.logger import Log

_TEST_TYPES = frozenset({"lab", "radiology", "other"})
_URGENCIES = frozenset({"routine", "urgent", "stat"})
_MAX_ITEMS = 100


def build_structured_data(data: Any) -> StructuredData:
    """Build a StructuredData from parsed JSON.

    Raises:
        StructuredExtractionError: if data is not a JSON object.
    """
    if not isinstance(data, dict):
        raise StructuredExtractionError("Structured data must be a JSON object")
    return StructuredData(
        symptoms=_named_items(data.get("symptoms"), "symptoms"),
        vitals=_build_vitals(data.get("vitals")),
        diagnoses=_named_items(data.get("diagnoses"), "diagnoses"),
        prescriptions=_build_prescriptions(data.get("prescriptions")),
        tests_ordered=_build_tests(data.get("testsOrdered", data.get("tests_ordered"))),
        advice=_named_items(data.get("advice"), "advice"),
    )


def _text(raw: Any) -> str:
    if raw is None or isinstance(raw, bool):
        return ""
    if isinstance(raw, (int, float)):
        return f"{raw:g}"
    if isinstance(raw, str):
        return raw.strip()
    return ""


def _list(raw: Any, field_name: str) -> list[Any]:
    if not isinstance(raw, list):
        return []
    if len(raw) > _MAX_ITEMS:
        Log.debug(f"{field_name}: keeping the first {_MAX_ITEMS} of {len(raw)} items")
    return raw[:_MAX_ITEMS]


def _named_items(raw: Any, field_name: str) -> list[str]:
    """Free-text items; objects are collapsed to their 'name'."""
    items: list[str] = []
    duplicates = 0
    for item in _list(raw, field_name):
        if isinstance(item, dict):
            item = item.get("name")
        text = _text(item) if isinstance(item, str) else ""
        if not text:
            continue
        if text in items:
            duplicates += 1
            continue
        items.append(text)
    if duplicates:
        Log.debug(f"{field_name}: dropped {duplicates} duplicate item(s)")
    return items


def _build_vitals(raw: Any) -> Vitals:
    if not isinstance(raw, dict):
        return Vitals()
    return Vitals(
        temperature=_text(raw.get("temperature")),
        blood_pressure=_text(raw.get("bloodPressure", raw.get("blood_pressure"))),
        pulse=_text(raw.get("pulse")),
        weight=_text(raw.get("weight")),
        height=_text(raw.get("height")),
    )


def _build_prescriptions(raw: Any) -> list[Prescription]:
    prescriptions: list[Prescription] = []
    for item in _list(raw, "prescriptions"):
        if not isinstance(item, dict):
            continue
        medicine = _text(item.get("medicine"))
        if not medicine:
            continue
        prescriptions.append(
            Prescription(
                medicine=medicine,
                dosage=_text(item.get("dosage")),
                frequency=_text(item.get("frequency")),
                duration=_text(item.get("duration")),
                instructions=_text(item.get("instructions")),
            )
        )
    return prescriptions


def _build_tests(raw: Any) -> list[TestOrder]:
    tests: list[TestOrder] = []
    for item in _list(raw, "testsOrdered"):
        if isinstance(item, str):
            item = {"testName": item}
        if not isinstance(item, dict):
            continue
        name = _text(item.get("testName", item.get("name")))
        if not name:
            continue
        test_type = _text(item.get("testType")).lower()
        urgency = _text(item.get("urgency")).lower()
        tests.append(
            TestOrder(
                name=name,
                test_type=test_type if test_type in _TEST_TYPES else "lab",
                instructions=_text(item.get("instructions")),
                urgency=urgency if urgency in _URGENCIES else "routine",
            )
        )
    return tests
