import json
from pathlib import Path

from casepaper.extraction.builder import build_structured_data
from casepaper.extraction.exceptions import StructuredExtractionError
from casepaper.extraction.models import StructuredData
from casepaper.llm.client_base import ChatModel
from casepaper.llm.exceptions import LlmError
from casepaper.llm.prompt_loader import load_json_schema, load_prompt_template, parse_json_object
from casepaper.logging.logger import Log
from casepaper.validation.base import BaseExtractionValidator
from casepaper.validation.exceptions import ValidationStageError
from casepaper.validation.models import ValidationOutcome, ValidationReport

_REPORT_SCHEMA: dict[str, object] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["isValid", "missingFields", "errors", "recommendations", "changes"],
    "properties": {
        "isValid": {"type": "boolean"},
        "missingFields": {"type": "array", "items": {"type": "string"}},
        "errors": {"type": "array", "items": {"type": "string"}},
        "recommendations": {"type": "array", "items": {"type": "string"}},
        "changes": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["field", "before", "after", "reason"],
                "properties": {
                    "field": {"type": "string"},
                    "before": {"type": "string"},
                    "after": {"type": "string"},
                    "reason": {"type": "string"},
                },
            },
        },
    },
}


class LlmExtractionValidator(BaseExtractionValidator):
    """Asks a language model to cross-check and correct the extracted fields."""

    def __init__(
        self,
        chat_model: ChatModel,
        *,
        prompt_template_path: Path | None = None,
        system_prompt: str = "You are a careful clinical data reviewer.",
    ) -> None:
        self._chat_model = chat_model
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template("validation_prompt.txt", prompt_template_path)
        self._json_schema: dict[str, object] = {
            "type": "object",
            "additionalProperties": False,
            "required": ["refinedData", "validationReport"],
            "properties": {
                "refinedData": load_json_schema("extraction_schema.json"),
                "validationReport": _REPORT_SCHEMA,
            },
        }

    def validate(
        self,
        structured_data: StructuredData,
        raw_text: str,
        normalized_text: str,
    ) -> ValidationOutcome:
        prompt = self._prompt_template.format(
            json_schema=json.dumps(self._json_schema, indent=2),
            structured_data=json.dumps(structured_data.to_dict(), indent=2, ensure_ascii=False),
            raw_text=raw_text,
            normalized_text=normalized_text,
        )
        Log.debug(f"Validation prompt:\n{prompt}")
        try:
            raw_response = self._chat_model.client.create_chat_completion(
                model=self._chat_model.model,
                temperature=self._chat_model.temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                json_schema=self._json_schema,
                schema_name="validation_result",
            )
            Log.debug(f"AI raw response:\n{raw_response}")
            parsed = parse_json_object(raw_response)
            refined = build_structured_data(parsed.get("refinedData"))
        except (LlmError, StructuredExtractionError) as exc:
            raise ValidationStageError(f"Validation failed: {exc}") from exc

        report_data = parsed.get("validationReport")
        if not isinstance(report_data, dict):
            raise ValidationStageError("Validation failed: 'validationReport' must be an object")
        report = ValidationReport.from_dict(report_data)
        Log.info(f"Validation complete: {len(report.changes)} changes reported by model")
        return ValidationOutcome(refined_data=refined, report=report)
