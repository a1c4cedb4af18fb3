import json

from casepaper.llm.example_client_adapter import ExampleClientAdapter


class TestExampleClientAdapter:
    def test_free_text_returns_sentinel(self) -> None:
        adapter = ExampleClientAdapter()
        content = adapter.create_chat_completion(
            model="example",
            temperature=0.0,
            system_prompt="system",
            user_prompt="clean this",
        )
        assert content == "No medical content detected"

    def test_structured_returns_empty_record(self) -> None:
        adapter = ExampleClientAdapter()
        content = adapter.create_chat_completion(
            model="example",
            temperature=0.0,
            system_prompt="system",
            user_prompt="extract",
            json_schema={"type": "object"},
        )
        data = json.loads(content)
        assert data["symptoms"] == []
        assert data["vitals"]["bloodPressure"] == ""
        assert data["testsOrdered"] == []
