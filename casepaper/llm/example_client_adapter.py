"""Offline chat client for local development and smoke runs.

Implement BaseChatClient and register the provider in LlmClientFactory to
add a real provider; this one makes no network calls.
"""

import json
from typing import ClassVar

from casepaper.llm.client_base import BaseChatClient


class ExampleClientAdapter(BaseChatClient):
    """Returns fixed, schema-valid replies.

    Free-text requests get the no-clinical-content sentinel; structured
    requests get an object whose fields are all empty.
    """

    FREE_TEXT_RESPONSE: ClassVar[str] = "No medical content detected"
    STRUCTURED_RESPONSE: ClassVar[dict[str, object]] = {
        "symptoms": [],
        "vitals": {
            "temperature": "",
            "bloodPressure": "",
            "pulse": "",
            "weight": "",
            "height": "",
        },
        "diagnoses": [],
        "prescriptions": [],
        "testsOrdered": [],
        "advice": [],
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
        schema_name: str = "result",
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, schema_name
        if json_schema is None:
            return self.FREE_TEXT_RESPONSE
        return json.dumps(self.STRUCTURED_RESPONSE)
