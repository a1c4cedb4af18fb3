"""Deterministic validation and refinement of extracted case-paper data."""

from collections.abc import Callable
from dataclasses import dataclass, field

from casepaper.extraction.models import Prescription, StructuredData, TestOrder, Vitals
from casepaper.logging.logger import Log
from casepaper.normalization.models import NO_MEDICAL_CONTENT
from casepaper.validation import rules
from casepaper.validation.base import BaseExtractionValidator
from casepaper.validation.models import FieldChange, ValidationOutcome, ValidationReport

_COMPLETENESS_WEIGHTS: dict[str, int] = {
    "symptoms": 2,
    "vitals": 1,
    "diagnoses": 3,
    "prescriptions": 3,
    "advice": 1,
}
_VITAL_CANONICALIZERS: dict[str, Callable[[str], str]] = {
    "temperature": rules.canonical_temperature,
    "blood_pressure": rules.canonical_blood_pressure,
    "pulse": rules.canonical_pulse,
    "weight": rules.canonical_weight,
    "height": rules.canonical_height,
}


@dataclass
class _Notes:
    errors: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    changes: list[FieldChange] = field(default_factory=list)

    def change(self, field_name: str, before: str, after: str, reason: str) -> None:
        self.changes.append(FieldChange(field=field_name, before=before, after=after, reason=reason))


class RuleBasedValidator(BaseExtractionValidator):
    """Cross-checks extracted fields against the source text with fixed rules.

    Corrections are limited to reformatting, clearing values that cannot be
    what the field claims, and adding items the source text names outright.
    Missing prescription details are reported, never filled in.
    """

    def validate(
        self,
        structured_data: StructuredData,
        raw_text: str,
        normalized_text: str,
    ) -> ValidationOutcome:
        source = self._source_text(raw_text, normalized_text)
        notes = _Notes()

        refined = structured_data.with_changes(
            symptoms=self._refine_symptoms(structured_data.symptoms, source, notes),
            vitals=self._refine_vitals(structured_data.vitals, notes),
            diagnoses=self._refine_diagnoses(structured_data.diagnoses, notes),
            prescriptions=self._refine_prescriptions(structured_data.prescriptions, notes),
            tests_ordered=self._refine_tests(structured_data.tests_ordered, source, notes),
        )
        report = self._build_report(refined, notes)
        Log.info(
            f"Validation complete: {len(notes.changes)} changes, {len(notes.errors)} errors, "
            f"quality {report.quality_score:.2f}"
        )
        return ValidationOutcome(refined_data=refined, report=report)

    @staticmethod
    def _source_text(raw_text: str, normalized_text: str) -> str:
        cleaned = normalized_text.strip()
        if cleaned == NO_MEDICAL_CONTENT:
            # The raw text only holds what the normalizer removed as non-clinical.
            return ""
        return cleaned or raw_text

    @staticmethod
    def _refine_symptoms(symptoms: list[str], source: str, notes: _Notes) -> list[str]:
        if symptoms or not source:
            return list(symptoms)
        found = [s for s in rules.COMMON_SYMPTOMS if rules.mentions(source, s)]
        if not found:
            return []
        notes.errors.append(f"Symptoms mentioned in text but not extracted: {', '.join(found)}")
        added = [s.capitalize() for s in found]
        notes.change("symptoms", "", ", ".join(added), "named in source text but not extracted")
        return added

    @staticmethod
    def _refine_vitals(vitals: Vitals, notes: _Notes) -> Vitals:
        values: dict[str, str] = {}
        for name, canonicalize in _VITAL_CANONICALIZERS.items():
            before: str = getattr(vitals, name)
            if not before:
                values[name] = before
                continue
            try:
                after = canonicalize(before)
            except rules.VitalOutOfRangeError as exc:
                notes.errors.append(f"{exc}; kept as written")
                values[name] = before
                continue
            except rules.ImplausibleVitalError as exc:
                notes.errors.append(str(exc))
                notes.change(f"vitals.{name}", before, "", "implausible value cleared")
                values[name] = ""
                continue
            if after != before:
                notes.change(f"vitals.{name}", before, after, "reformatted")
            values[name] = after
        return Vitals(**values)

    @staticmethod
    def _refine_diagnoses(diagnoses: list[str], notes: _Notes) -> list[str]:
        refined: list[str] = []
        for diagnosis in diagnoses:
            name = diagnosis
            for keywords, standard in rules.STANDARD_DIAGNOSIS_NAMES:
                if name != standard and any(rules.mentions(name, k) for k in keywords):
                    notes.change("diagnoses", name, standard, "standardized diagnosis name")
                    name = standard
                    break
            for condition, code in rules.ICD10_CODES:
                if rules.mentions(name, condition):
                    notes.recommendations.append(f'ICD-10 code {code} fits diagnosis "{name}"')
                    break
            if name not in refined:
                refined.append(name)
        return refined

    @staticmethod
    def _refine_prescriptions(
        prescriptions: list[Prescription],
        notes: _Notes,
    ) -> list[Prescription]:
        refined: list[Prescription] = []
        for index, prescription in enumerate(prescriptions):
            medicine = prescription.medicine
            prefix = f"prescriptions[{index}]"
            dosage = prescription.dosage
            topical_dosage = RuleBasedValidator._topical_dosage(medicine)
            if topical_dosage and any(rules.mentions(dosage, form) for form in rules.ORAL_FORMS):
                notes.errors.append(f'"{medicine}" is a topical product but is marked "{dosage}"')
                notes.change(f"{prefix}.dosage", dosage, topical_dosage, "topical product given an oral form")
                dosage = topical_dosage

            frequency = rules.standard_frequency(prescription.frequency)
            if frequency != prescription.frequency:
                notes.change(
                    f"{prefix}.frequency", prescription.frequency, frequency, "standardized frequency"
                )

            for label, value in (("dosage", dosage), ("frequency", frequency),
                                 ("duration", prescription.duration)):
                if not value:
                    notes.recommendations.append(f'Add {label} for "{medicine}"')

            refined.append(
                Prescription(
                    medicine=medicine,
                    dosage=dosage,
                    frequency=frequency,
                    duration=prescription.duration,
                    instructions=prescription.instructions,
                )
            )
        return refined

    @staticmethod
    def _topical_dosage(medicine: str) -> str:
        for keywords, dosage in rules.TOPICAL_FORMS:
            if any(rules.mentions(medicine, k) for k in keywords):
                return dosage
        return ""

    @staticmethod
    def _refine_tests(tests: list[TestOrder], source: str, notes: _Notes) -> list[TestOrder]:
        refined = list(tests)
        if not source:
            return refined
        ordered = " | ".join(t.name.lower() for t in tests)
        for known in rules.COMMON_TESTS:
            if not any(rules.mentions(source, alias) for alias in known.aliases):
                continue
            if any(rules.mentions(ordered, alias) for alias in (known.name.lower(), *known.aliases)):
                continue
            refined.append(TestOrder(name=known.name, test_type=known.test_type))
            notes.change("testsOrdered", "", known.name, "named in source text but not extracted")
        return refined

    @staticmethod
    def _build_report(data: StructuredData, notes: _Notes) -> ValidationReport:
        present = {
            "symptoms": bool(data.symptoms),
            "vitals": bool(data.vitals.recorded()),
            "diagnoses": bool(data.diagnoses),
            "prescriptions": bool(data.prescriptions),
            "advice": bool(data.advice),
        }
        missing = [name for name, found in present.items() if not found]
        points = sum(_COMPLETENESS_WEIGHTS[name] for name, found in present.items() if found)
        completeness = min(points / sum(_COMPLETENESS_WEIGHTS.values()), 1.0)
        accuracy = max(0.0, 1.0 - 0.2 * len(notes.errors) - 0.1 * len(notes.recommendations))
        return ValidationReport(
            is_valid=not notes.errors and len(missing) <= 2,
            missing_fields=missing,
            errors=notes.errors,
            recommendations=notes.recommendations,
            changes=notes.changes,
            completeness_score=round(completeness, 3),
            accuracy_score=round(accuracy, 3),
            quality_score=round(0.6 * completeness + 0.4 * accuracy, 3),
        )
