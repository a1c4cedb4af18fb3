import json
from unittest.mock import MagicMock

import pytest

from casepaper.extraction.exceptions import StructuredExtractionError
from casepaper.extraction.extractor import StructuredMedicalExtractor
from casepaper.llm.client_base import BaseChatClient, ChatModel
from casepaper.llm.exceptions import LlmError

CLINICAL_TEXT = "C/o fever, body ache\nDx: Viral fever\nRx: Tab Paracetamol 500mg TID x 3 days"

RESPONSE = {
    "symptoms": ["Fever", "Body ache"],
    "vitals": {"temperature": "", "bloodPressure": "", "pulse": "", "weight": "", "height": ""},
    "diagnoses": ["Viral fever"],
    "prescriptions": [
        {
            "medicine": "Paracetamol",
            "dosage": "500mg",
            "frequency": "TID",
            "duration": "3 days",
            "instructions": "",
        }
    ],
    "testsOrdered": [],
    "advice": [],
}


def _make_extractor(response: str) -> tuple[StructuredMedicalExtractor, MagicMock]:
    client = MagicMock(spec=BaseChatClient)
    client.create_chat_completion.return_value = response
    return StructuredMedicalExtractor(ChatModel(client=client, model="m", temperature=0.1)), client


class TestStructuredMedicalExtractor:
    def test_extracts_structured_data(self) -> None:
        extractor, client = _make_extractor(json.dumps(RESPONSE))

        data = extractor.extract(CLINICAL_TEXT)

        assert data.symptoms == ["Fever", "Body ache"]
        assert data.diagnoses == ["Viral fever"]
        assert data.prescriptions[0].frequency == "TID"
        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["schema_name"] == "case_paper_extraction"
        assert kwargs["json_schema"]["required"]
        assert CLINICAL_TEXT in kwargs["user_prompt"]

    def test_fenced_response_is_accepted(self) -> None:
        extractor, _ = _make_extractor(f"```json\n{json.dumps(RESPONSE)}\n```")
        assert extractor.extract(CLINICAL_TEXT).diagnoses == ["Viral fever"]

    def test_invalid_json_raises(self) -> None:
        extractor, _ = _make_extractor("Sorry, I cannot help")
        with pytest.raises(StructuredExtractionError, match="Invalid JSON"):
            extractor.extract(CLINICAL_TEXT)

    def test_provider_error_is_translated(self) -> None:
        extractor, client = _make_extractor("")
        client.create_chat_completion.side_effect = LlmError("AI returned empty response")
        with pytest.raises(StructuredExtractionError, match="empty response"):
            extractor.extract(CLINICAL_TEXT)

    def test_missing_fields_are_filled_empty(self) -> None:
        extractor, _ = _make_extractor('{"diagnoses": ["Gastritis"]}')
        data = extractor.extract(CLINICAL_TEXT)
        assert data.diagnoses == ["Gastritis"]
        assert data.symptoms == []
        assert data.vitals.temperature == ""
