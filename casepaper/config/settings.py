from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "casepaper"
    db_username: str = "casepaper"
    db_password: str = "secret"

    storage_backend: str = "local"
    storage_local_root: str = "/app/files"
    storage_public_base_url: str = ""
    storage_supabase_url: str = ""
    storage_supabase_key: str = ""
    storage_bucket: str = "ocruploads"
    storage_timeout_seconds: int = 30

    pdf_engine: str = "pymupdf"
    pdf_render_dpi: int = 200

    ocr_provider: str = "google_vision"
    ocr_google_api_key: str = ""
    ocr_google_endpoint: str = "https://vision.googleapis.com/v1/images:annotate"
    ocr_timeout_seconds: int = 30

    llm_provider: str = "openai"

    llm_openai_api_key: str = ""
    llm_openai_model_name: str = "gpt-4o-mini"
    llm_openai_timeout_seconds: int = 30
    llm_openai_temperature: float = 0.1

    llm_openai_compatible_api_key: str = ""
    llm_openai_compatible_base_url: str = ""
    llm_openai_compatible_model_name: str = ""
    llm_openai_compatible_timeout_seconds: int = 30

    llm_openrouter_api_key: str = ""
    llm_openrouter_model_name: str = ""
    llm_openrouter_timeout_seconds: int = 30

    llm_groq_api_key: str = ""
    llm_groq_model_name: str = ""
    llm_groq_timeout_seconds: int = 30

    llm_together_api_key: str = ""
    llm_together_model_name: str = ""
    llm_together_timeout_seconds: int = 30

    llm_deepseek_api_key: str = ""
    llm_deepseek_model_name: str = ""
    llm_deepseek_timeout_seconds: int = 30

    llm_ollama_api_key: str = "ollama"
    llm_ollama_model_name: str = ""
    llm_ollama_timeout_seconds: int = 60

    validation_mode: str = "rules"
    nominal_confidence: float = 0.85

    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_mime_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/heic",
        "application/pdf",
    ]

    history_limit: int = 50
