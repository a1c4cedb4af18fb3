import argparse
import json
import mimetypes
import sys
from pathlib import Path

from casepaper.config.settings import Settings
from casepaper.database.connection import close_pool, init_pool
from casepaper.logging.logger import Log
from casepaper.pipeline.models import Completed, Degraded, ProcessingOutcome, Rejected
from casepaper.pipeline.service import CasePaperService, build_service

EXIT_OK = 0
EXIT_DEGRADED = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="casepaper", description="Case paper extraction")
    commands = parser.add_subparsers(dest="command", required=True)

    process = commands.add_parser("process", help="Run one case paper through the pipeline")
    process.add_argument("file", type=Path)
    process.add_argument("--clinic", required=True, dest="clinic_id")
    process.add_argument("--submitted-by", required=True, dest="submitted_by")
    process.add_argument("--patient", dest="patient_id")
    process.add_argument("--visit", dest="visit_id")
    process.add_argument("--mime-type", dest="mime_type")

    history = commands.add_parser("history", help="List past results for a clinic")
    history.add_argument("--clinic", required=True, dest="clinic_id")
    history.add_argument("--limit", type=int)
    return parser


def outcome_to_dict(outcome: ProcessingOutcome) -> dict:
    if isinstance(outcome, Completed):
        return {"status": "completed", "result": outcome.result.to_dict()}
    if isinstance(outcome, Degraded):
        return {
            "status": "degraded",
            "failedStage": outcome.failed_stage.value,
            "reason": outcome.reason,
            "result": outcome.result.to_dict(),
        }
    return {"status": "rejected", "stage": outcome.stage.value, "reason": outcome.reason}


def exit_code(outcome: ProcessingOutcome) -> int:
    if isinstance(outcome, Rejected):
        return EXIT_REJECTED
    if isinstance(outcome, Degraded):
        return EXIT_DEGRADED
    return EXIT_OK


def run_process(service: CasePaperService, args: argparse.Namespace) -> int:
    mime_type = args.mime_type or mimetypes.guess_type(args.file.name)[0] or ""
    outcome = service.process_document(
        file_name=args.file.name,
        content=args.file.read_bytes(),
        mime_type=mime_type,
        clinic_id=args.clinic_id,
        submitted_by=args.submitted_by,
        patient_id=args.patient_id,
        visit_id=args.visit_id,
    )
    print(json.dumps(outcome_to_dict(outcome), indent=2, ensure_ascii=False))
    return exit_code(outcome)


def run_history(service: CasePaperService, args: argparse.Namespace) -> int:
    results = service.get_history(args.clinic_id, args.limit)
    print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool -> build service -> run command."""
    args = build_parser().parse_args(argv)
    if args.command == "process" and not args.file.is_file():
        print(f"File not found: {args.file}", file=sys.stderr)
        return EXIT_REJECTED

    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        service = build_service(settings)
        if args.command == "process":
            return run_process(service, args)
        return run_history(service, args)
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
