"""AI-powered clinical text normalizer."""

from pathlib import Path

from casepaper.llm.client_base import ChatModel
from casepaper.llm.exceptions import LlmError
from casepaper.llm.prompt_loader import load_prompt_template
from casepaper.logging.logger import Log
from casepaper.normalization.base import BaseNormalizer
from casepaper.normalization.exceptions import NormalizationFailedError
from casepaper.normalization.models import NO_MEDICAL_CONTENT, NormalizedText


class ClinicalTextNormalizer(BaseNormalizer):
    """Removes letterhead, contact, billing and signature noise with a language model.

    The model is asked to subtract only; the output is never merged back
    with anything the model did not receive.
    """

    def __init__(
        self,
        chat_model: ChatModel,
        *,
        prompt_template_path: Path | None = None,
        system_prompt: str = "You are a medical text cleaning assistant.",
    ) -> None:
        self._chat_model = chat_model
        self._temperature = max(0.0, min(0.2, chat_model.temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(
            "normalization_prompt.txt", prompt_template_path
        )

    def normalize(self, raw_text: str) -> NormalizedText:
        """Return the clinical subset of raw_text."""
        prompt = self._prompt_template.format(raw_text=raw_text, sentinel=NO_MEDICAL_CONTENT)
        Log.debug(f"Normalization prompt:\n{prompt}")

        try:
            response = self._chat_model.client.create_chat_completion(
                model=self._chat_model.model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
            )
        except LlmError as exc:
            raise NormalizationFailedError(f"Normalization call failed: {exc}") from exc

        cleaned = self._strip_fences(response)
        if not cleaned:
            raise NormalizationFailedError("Normalization returned no text")

        result = NormalizedText(text=cleaned, original_length=len(raw_text))
        if result.has_clinical_content:
            Log.info(
                f"Normalization complete: kept {len(cleaned)} of {len(raw_text)} chars"
            )
        else:
            Log.warning("Normalization found no medical content")
        return result

    @staticmethod
    def _strip_fences(raw: str) -> str:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines).strip()
        return cleaned
