import pytest
from pydantic import ValidationError

from casepaper.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pymupdf"

    def test_default_providers(self) -> None:
        s = Settings()
        assert s.ocr_provider == "google_vision"
        assert s.llm_provider == "openai"
        assert s.validation_mode == "rules"

    def test_default_timeouts(self) -> None:
        s = Settings()
        assert s.ocr_timeout_seconds == 30
        assert s.llm_openai_timeout_seconds == 30
        assert s.storage_timeout_seconds == 30

    def test_default_nominal_confidence(self) -> None:
        s = Settings()
        assert s.nominal_confidence == 0.85

    def test_default_upload_limits(self) -> None:
        s = Settings()
        assert s.max_upload_bytes == 10 * 1024 * 1024
        assert "application/pdf" in s.allowed_mime_types
        assert "image/jpeg" in s.allowed_mime_types


class TestSettingsFromEnv:
    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_llm_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "groq")
        monkeypatch.setenv("LLM_GROQ_MODEL_NAME", "llama-3.1-8b-instant")
        s = Settings()
        assert s.llm_provider == "groq"
        assert s.llm_groq_model_name == "llama-3.1-8b-instant"

    def test_loads_allowed_mime_types_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOWED_MIME_TYPES", '["image/png"]')
        s = Settings()
        assert s.allowed_mime_types == ["image/png"]


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCR_TIMEOUT_SECONDS", "abc")
        with pytest.raises(ValidationError):
            Settings()
