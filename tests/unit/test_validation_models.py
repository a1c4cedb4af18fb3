from casepaper.validation.models import FieldChange, ValidationReport


class TestValidationReport:
    def test_to_dict_uses_wire_names(self) -> None:
        report = ValidationReport(
            is_valid=False,
            missing_fields=["advice"],
            errors=["bad pulse"],
            changes=[FieldChange(field="vitals.pulse", before="920", after="", reason="cleared")],
            completeness_score=0.9,
        )
        data = report.to_dict()
        assert data["isValid"] is False
        assert data["missingFields"] == ["advice"]
        assert data["changes"][0]["before"] == "920"
        assert data["completenessScore"] == 0.9

    def test_from_dict_restores_report(self) -> None:
        original = ValidationReport(
            recommendations=["Add duration"],
            changes=[FieldChange(field="diagnoses", before="mpb", after="Male Pattern Baldness", reason="x")],
            accuracy_score=0.8,
        )
        assert ValidationReport.from_dict(original.to_dict()) == original

    def test_from_dict_clamps_scores(self) -> None:
        report = ValidationReport.from_dict({"qualityScore": 7, "accuracyScore": "high"})
        assert report.quality_score == 1.0
        assert report.accuracy_score == 0.0
