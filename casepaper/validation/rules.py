"""Keyword tables and vital-sign canonicalization used by the rule-based refiner."""

import re
from dataclasses import dataclass

COMMON_SYMPTOMS: tuple[str, ...] = (
    "fever",
    "headache",
    "cough",
    "cold",
    "body ache",
    "pain",
    "nausea",
    "vomiting",
    "diarrhea",
    "constipation",
    "fatigue",
    "weakness",
    "dizziness",
    "hair fall",
    "hair loss",
    "thinning",
    "itching",
    "rash",
    "swelling",
    "burning",
    "discharge",
)

# Most specific first: the first match wins.
ICD10_CODES: tuple[tuple[str, str], ...] = (
    ("male pattern baldness", "L64.0"),
    ("androgenetic alopecia", "L64.0"),
    ("mpb", "L64.0"),
    ("upper respiratory tract infection", "J06.9"),
    ("urti", "J06.9"),
    ("viral fever", "A99"),
    ("common cold", "J00"),
    ("hypertension", "I10"),
    ("diabetes", "E11.9"),
    ("gastritis", "K29.7"),
    ("headache", "R51"),
    ("fever", "R50.9"),
)

STANDARD_DIAGNOSIS_NAMES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("male pattern", "mpb"), "Male Pattern Baldness"),
    (("androgenetic",), "Androgenetic Alopecia"),
    (("upper respiratory", "urti"), "Upper Respiratory Tract Infection"),
)

TOPICAL_FORMS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("shampoo",), "Apply to scalp"),
    (("cream", "ointment"), "Apply thin layer"),
    (("serum", "solution", "lotion", "gel", "foam", "oil"), "Apply topically"),
)
ORAL_FORMS: tuple[str, ...] = ("tablet", "tab", "capsule", "cap", "pill")

_DAILY = r"(?:\s+(?:a|per)\s+day|\s+daily|\s*/\s*day)"

# Only daily rates map to a code. Checked in order; "twice daily" must
# resolve before the bare "daily".
FREQUENCY_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(rf"\b(?:four|4)\s+times?{_DAILY}\b"), "QID"),
    (re.compile(rf"\b(?:thrice|three\s+times?|3\s+times?){_DAILY}\b"), "TID"),
    (re.compile(rf"\b(?:twice|two\s+times?|2\s+times?){_DAILY}\b"), "BD"),
    (re.compile(rf"\b(?:once|one\s+time|1\s+time){_DAILY}\b|^daily$"), "OD"),
)
_NOT_DAILY = re.compile(
    r"week|month|fortnight|alternate|every\s*\d|\bsos\b|at\s+night|bedtime|\bhs\b|\bprn\b|as\s+needed"
)


@dataclass(frozen=True)
class KnownTest:
    name: str
    test_type: str
    aliases: tuple[str, ...]


COMMON_TESTS: tuple[KnownTest, ...] = (
    KnownTest("CBC", "lab", ("cbc", "complete blood count")),
    KnownTest("LFT", "lab", ("lft", "liver function")),
    KnownTest("KFT", "lab", ("kft", "kidney function", "rft", "renal function")),
    KnownTest("TSH", "lab", ("tsh", "thyroid profile", "thyroid function")),
    KnownTest("HbA1c", "lab", ("hba1c",)),
    KnownTest("Blood sugar", "lab", ("blood sugar", "fbs", "ppbs", "rbs")),
    KnownTest("Lipid profile", "lab", ("lipid profile",)),
    KnownTest("Serum ferritin", "lab", ("ferritin",)),
    KnownTest("Vitamin D", "lab", ("vitamin d", "vit d")),
    KnownTest("Vitamin B12", "lab", ("vitamin b12", "vit b12")),
    KnownTest("ECG", "other", ("ecg", "ekg")),
    KnownTest("X-ray", "radiology", ("x-ray", "xray")),
    KnownTest("Ultrasound", "radiology", ("ultrasound", "usg")),
    KnownTest("CT scan", "radiology", ("ct scan",)),
    KnownTest("MRI", "radiology", ("mri",)),
)

_NUMBER = r"(\d{1,3}(?:\.\d+)?)"
_BP = re.compile(r"(\d{2,3})\s*[/\\-]\s*(\d{2,3})")


def mentions(text: str, phrase: str) -> bool:
    """Whole-word, case-insensitive phrase match."""
    return re.search(rf"(?<![a-z0-9]){re.escape(phrase.lower())}(?![a-z0-9])", text.lower()) is not None


def standard_frequency(frequency: str) -> str:
    """Map a daily rate in words to OD/BD/TID/QID; anything else is returned as given."""
    lowered = frequency.strip().lower()
    if _NOT_DAILY.search(lowered):
        return frequency
    for pattern, code in FREQUENCY_PATTERNS:
        if pattern.search(lowered):
            return code
    return frequency


def _first_number(value: str) -> float | None:
    match = re.search(_NUMBER, value)
    return float(match.group(1)) if match else None


def _fmt(number: float) -> str:
    return f"{number:g}"


class ImplausibleVitalError(ValueError):
    """The value has no numeric reading and cannot be the named vital sign."""


class VitalOutOfRangeError(ImplausibleVitalError):
    """The value has a numeric reading that does not fit the vital's usual range or shape."""


def canonical_temperature(value: str) -> str:
    number = _first_number(value)
    if number is None:
        raise ImplausibleVitalError(f"temperature '{value}' has no numeric reading")
    lowered = value.lower()
    if "c" in lowered.replace("deg", "") and 30 <= number <= 45:
        return f"{_fmt(number)} °C"
    if 90 <= number <= 110:
        return f"{_fmt(number)} °F"
    if 34 <= number <= 43:
        return f"{_fmt(number)} °C"
    raise VitalOutOfRangeError(f"temperature '{value}' is outside the plausible range")


def canonical_blood_pressure(value: str) -> str:
    match = _BP.search(value)
    if match is None:
        if _first_number(value) is None:
            raise ImplausibleVitalError(f"blood pressure '{value}' has no numeric reading")
        raise VitalOutOfRangeError(f"blood pressure '{value}' is not a systolic/diastolic pair")
    systolic, diastolic = int(match.group(1)), int(match.group(2))
    if not (50 <= systolic <= 260 and 30 <= diastolic <= 160) or systolic <= diastolic:
        raise VitalOutOfRangeError(f"blood pressure '{value}' is outside the plausible range")
    return f"{systolic}/{diastolic} mmHg"


def canonical_pulse(value: str) -> str:
    number = _first_number(value)
    if number is None:
        raise ImplausibleVitalError(f"pulse '{value}' has no numeric reading")
    if not 30 <= number <= 220:
        raise VitalOutOfRangeError(f"pulse '{value}' is outside the usual heart-rate range")
    return f"{int(number)} bpm"


def canonical_weight(value: str) -> str:
    number = _first_number(value)
    if number is None:
        raise ImplausibleVitalError(f"weight '{value}' has no numeric reading")
    unit = "lb" if re.search(r"\blbs?\b", value.lower()) else "kg"
    upper = 660 if unit == "lb" else 300
    if not 0.5 <= number <= upper:
        raise VitalOutOfRangeError(f"weight '{value}' is outside the plausible range")
    return f"{_fmt(number)} {unit}"


def canonical_height(value: str) -> str:
    lowered = value.lower()
    number = _first_number(value)
    if number is None:
        raise ImplausibleVitalError(f"height '{value}' has no numeric reading")
    if "'" in value or "ft" in lowered or "feet" in lowered:
        return value.strip()
    if re.search(r"(?<![a-z])m\b", lowered) and number < 3:
        number = number * 100
    if not 30 <= number <= 250:
        raise VitalOutOfRangeError(f"height '{value}' is outside the plausible range")
    return f"{_fmt(number)} cm"
