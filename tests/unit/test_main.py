import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from casepaper.extraction.models import StructuredData
from casepaper.main import (
    EXIT_DEGRADED,
    EXIT_OK,
    EXIT_REJECTED,
    build_parser,
    exit_code,
    main,
    outcome_to_dict,
)
from casepaper.pipeline.models import Completed, Degraded, ExtractionResult, Rejected, Stage


def _make_result() -> ExtractionResult:
    return ExtractionResult(
        id="result-1",
        upload_record_id="upload-1",
        raw_text="raw",
        normalized_text="clean",
        structured_data=StructuredData(diagnoses=["Viral fever"]),
        confidence=0.85,
        processing_time_ms=10,
    )


class TestParser:
    def test_process_arguments(self) -> None:
        args = build_parser().parse_args(
            ["process", "scan.jpg", "--clinic", "c-1", "--submitted-by", "dr-1", "--patient", "p-1"]
        )
        assert args.command == "process"
        assert args.file == Path("scan.jpg")
        assert args.clinic_id == "c-1"
        assert args.patient_id == "p-1"
        assert args.visit_id is None

    def test_history_requires_clinic(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["history"])


class TestOutcomeRendering:
    def test_completed(self) -> None:
        outcome = Completed(result=_make_result())
        data = outcome_to_dict(outcome)
        assert data["status"] == "completed"
        assert data["result"]["structuredData"]["diagnoses"] == ["Viral fever"]
        assert exit_code(outcome) == EXIT_OK

    def test_degraded(self) -> None:
        outcome = Degraded(result=_make_result(), failed_stage=Stage.EXTRACTING, reason="blank")
        data = outcome_to_dict(outcome)
        assert data["failedStage"] == "extracting"
        assert exit_code(outcome) == EXIT_DEGRADED

    def test_rejected(self) -> None:
        outcome = Rejected(reason="file is empty")
        assert outcome_to_dict(outcome) == {
            "status": "rejected",
            "stage": "not_started",
            "reason": "file is empty",
        }
        assert exit_code(outcome) == EXIT_REJECTED


class TestMain:
    def test_missing_file_is_rejected_without_database(self, tmp_path: Path) -> None:
        with patch("casepaper.main.Log"), patch("casepaper.main.init_pool") as mock_init:
            code = main(
                ["process", str(tmp_path / "missing.jpg"), "--clinic", "c", "--submitted-by", "d"]
            )
        assert code == EXIT_REJECTED
        mock_init.assert_not_called()

    def test_process_prints_outcome(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        scan = tmp_path / "scan.jpg"
        scan.write_bytes(b"img")
        service = MagicMock()
        service.process_document.return_value = Completed(result=_make_result())

        with (
            patch("casepaper.main.Log"),
            patch("casepaper.main.init_pool"),
            patch("casepaper.main.close_pool") as mock_close,
            patch("casepaper.main.build_service", return_value=service),
        ):
            code = main(["process", str(scan), "--clinic", "c-1", "--submitted-by", "dr-1"])

        assert code == EXIT_OK
        kwargs = service.process_document.call_args.kwargs
        assert kwargs["mime_type"] == "image/jpeg"
        assert kwargs["content"] == b"img"
        assert json.loads(capsys.readouterr().out)["status"] == "completed"
        mock_close.assert_called_once()

    def test_history_prints_results(self, capsys: pytest.CaptureFixture[str]) -> None:
        service = MagicMock()
        service.get_history.return_value = [_make_result()]

        with (
            patch("casepaper.main.Log"),
            patch("casepaper.main.init_pool"),
            patch("casepaper.main.close_pool"),
            patch("casepaper.main.build_service", return_value=service),
        ):
            code = main(["history", "--clinic", "c-1", "--limit", "3"])

        assert code == EXIT_OK
        service.get_history.assert_called_once_with("c-1", 3)
        assert json.loads(capsys.readouterr().out)[0]["id"] == "result-1"
