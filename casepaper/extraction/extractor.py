"""AI-powered structured medical extractor."""

import json
from pathlib import Path

from casepaper.extraction.base import BaseStructuredExtractor
from casepaper.extraction.builder import build_structured_data
from casepaper.extraction.exceptions import StructuredExtractionError
from casepaper.extraction.models import StructuredData
from casepaper.llm.client_base import ChatModel
from casepaper.llm.exceptions import LlmError
from casepaper.llm.prompt_loader import load_json_schema, load_prompt_template, parse_json_object
from casepaper.logging.logger import Log


class StructuredMedicalExtractor(BaseStructuredExtractor):
    """Turns cleaned clinical text into StructuredData using an AI provider."""

    def __init__(
        self,
        chat_model: ChatModel,
        *,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "You are a medical data extraction assistant.",
    ) -> None:
        self._chat_model = chat_model
        self._temperature = max(0.0, min(0.2, chat_model.temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template("extraction_prompt.txt", prompt_template_path)
        self._json_schema = load_json_schema("extraction_schema.json", json_schema_path)

    def extract(self, clinical_text: str) -> StructuredData:
        prompt = self._prompt_template.format(
            clinical_text=clinical_text,
            json_schema=json.dumps(self._json_schema, indent=2),
        )
        Log.debug(f"Extraction prompt:\n{prompt}")

        try:
            raw_response = self._chat_model.client.create_chat_completion(
                model=self._chat_model.model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                json_schema=self._json_schema,
                schema_name="case_paper_extraction",
            )
            Log.debug(f"AI raw response:\n{raw_response}")
            parsed = parse_json_object(raw_response)
        except LlmError as exc:
            raise StructuredExtractionError(f"Structured extraction failed: {exc}") from exc

        data = build_structured_data(parsed)
        Log.info(
            f"Extraction complete: {len(data.symptoms)} symptoms, "
            f"{len(data.diagnoses)} diagnoses, {len(data.prescriptions)} prescriptions, "
            f"{len(data.tests_ordered)} tests"
        )
        return data
