from pathlib import Path

import pytest

from casepaper.llm.exceptions import LlmError
from casepaper.llm.prompt_loader import load_json_schema, load_prompt_template, parse_json_object


class TestLoadPromptTemplate:
    def test_loads_bundled_templates(self) -> None:
        assert "{raw_text}" in load_prompt_template("normalization_prompt.txt")
        assert "{clinical_text}" in load_prompt_template("extraction_prompt.txt")
        assert "{structured_data}" in load_prompt_template("validation_prompt.txt")

    def test_explicit_path_overrides(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Clean: {raw_text}", encoding="utf-8")
        assert load_prompt_template("normalization_prompt.txt", custom) == "Clean: {raw_text}"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(LlmError, match="Failed to load prompt template"):
            load_prompt_template("x.txt", tmp_path / "missing.txt")


class TestLoadJsonSchema:
    def test_extraction_schema_requires_all_fields(self) -> None:
        schema = load_json_schema("extraction_schema.json")
        assert schema["additionalProperties"] is False
        assert set(schema["required"]) == {  # type: ignore[arg-type]
            "symptoms",
            "vitals",
            "diagnoses",
            "prescriptions",
            "testsOrdered",
            "advice",
        }

    def test_non_object_schema_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(LlmError, match="must be an object"):
            load_json_schema("schema.json", path)


class TestParseJsonObject:
    def test_parses_plain_object(self) -> None:
        assert parse_json_object('{"a": 1}') == {"a": 1}

    def test_strips_code_fences(self) -> None:
        assert parse_json_object('```json\n{"a": 1}\n```') == {"a": 1}

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(LlmError, match="Invalid JSON response"):
            parse_json_object("not json")

    def test_array_raises(self) -> None:
        with pytest.raises(LlmError, match="must be an object"):
            parse_json_object("[1, 2]")
