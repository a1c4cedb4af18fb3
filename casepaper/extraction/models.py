from dataclasses import dataclass, field, replace
from typing import Any

VITAL_NAMES: tuple[str, ...] = ("temperature", "bloodPressure", "pulse", "weight", "height")


@dataclass(frozen=True)
class Vitals:
    """Named vital-sign readings; an empty string means not recorded."""

    temperature: str = ""
    blood_pressure: str = ""
    pulse: str = ""
    weight: str = ""
    height: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "temperature": self.temperature,
            "bloodPressure": self.blood_pressure,
            "pulse": self.pulse,
            "weight": self.weight,
            "height": self.height,
        }

    def recorded(self) -> dict[str, str]:
        return {name: value for name, value in self.to_dict().items() if value}


@dataclass(frozen=True)
class Prescription:
    medicine: str
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    instructions: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "medicine": self.medicine,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "duration": self.duration,
            "instructions": self.instructions,
        }


@dataclass(frozen=True)
class TestOrder:
    """A laboratory or imaging investigation ordered during the encounter."""

    __test__ = False  # not a pytest test class

    name: str
    test_type: str = "lab"  # "lab" | "radiology" | "other"
    instructions: str = ""
    urgency: str = "routine"  # "routine" | "urgent" | "stat"

    def to_dict(self) -> dict[str, str]:
        return {
            "testName": self.name,
            "testType": self.test_type,
            "instructions": self.instructions,
            "urgency": self.urgency,
        }


@dataclass(frozen=True)
class StructuredData:
    """Encounter fields extracted from a case paper.

    Every field is always present; "nothing found" is an empty container,
    never None.
    """

    symptoms: list[str] = field(default_factory=list)
    vitals: Vitals = field(default_factory=Vitals)
    diagnoses: list[str] = field(default_factory=list)
    prescriptions: list[Prescription] = field(default_factory=list)
    tests_ordered: list[TestOrder] = field(default_factory=list)
    advice: list[str] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "StructuredData":
        return cls()

    @classmethod
    def advisory(cls, message: str) -> "StructuredData":
        """Empty record carrying a single advisory line for the reviewer."""
        return cls(advice=[message])

    def with_changes(self, **changes: Any) -> "StructuredData":
        return replace(self, **changes)

    def is_empty(self) -> bool:
        return not (
            self.symptoms
            or self.vitals.recorded()
            or self.diagnoses
            or self.prescriptions
            or self.tests_ordered
            or self.advice
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "symptoms": list(self.symptoms),
            "vitals": self.vitals.to_dict(),
            "diagnoses": list(self.diagnoses),
            "prescriptions": [p.to_dict() for p in self.prescriptions],
            "testsOrdered": [t.to_dict() for t in self.tests_ordered],
            "advice": list(self.advice),
        }
