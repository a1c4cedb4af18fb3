from dataclasses import dataclass, field
from typing import Any

from casepaper.extraction.models import StructuredData


@dataclass(frozen=True)
class FieldChange:
    """One correction applied to the extracted data."""

    field: str
    before: str
    after: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {
            "field": self.field,
            "before": self.before,
            "after": self.after,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Audit notes produced by the validation stage."""

    is_valid: bool = True
    missing_fields: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    changes: list[FieldChange] = field(default_factory=list)
    completeness_score: float = 0.0
    accuracy_score: float = 0.0
    quality_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "missingFields": list(self.missing_fields),
            "errors": list(self.errors),
            "recommendations": list(self.recommendations),
            "changes": [c.to_dict() for c in self.changes],
            "completenessScore": self.completeness_score,
            "accuracyScore": self.accuracy_score,
            "qualityScore": self.quality_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValidationReport":
        """Rebuild a report from its JSON form; unknown keys are ignored."""
        changes = [
            FieldChange(
                field=str(c.get("field", "")),
                before=str(c.get("before", "")),
                after=str(c.get("after", "")),
                reason=str(c.get("reason", "")),
            )
            for c in data.get("changes") or []
            if isinstance(c, dict)
        ]
        return cls(
            is_valid=bool(data.get("isValid", True)),
            missing_fields=[str(v) for v in data.get("missingFields") or []],
            errors=[str(v) for v in data.get("errors") or []],
            recommendations=[str(v) for v in data.get("recommendations") or []],
            changes=changes,
            completeness_score=_score(data.get("completenessScore")),
            accuracy_score=_score(data.get("accuracyScore")),
            quality_score=_score(data.get("qualityScore")),
        )


@dataclass(frozen=True)
class ValidationOutcome:
    refined_data: StructuredData
    report: ValidationReport


def _score(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0.0
    return max(0.0, min(1.0, float(raw)))
