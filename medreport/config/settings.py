from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", protected_namespaces=("settings_",)
    )

    app_env: str = "dev"
    log_level: str = "INFO"
    debug_errors: bool = False

    host: str = "0.0.0.0"
    port: int = 3000

    upload_dir: str = "uploads"
    max_file_mb: int = 15
    extraction_workers: int = 4
    min_text_length: int = 10

    pdf_engine: str = "pdfplumber"
    ocr_language: str = "eng"

    model_provider: str = "ollama"
    model_timeout_seconds: int = 120
    model_probe_timeout_seconds: int = 5

    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"
    ollama_temperature: float = 0.7
    ollama_num_predict: int = 2000

    openai_api_key: str = ""
    openai_model_name: str = ""
    openai_base_url: str = ""
    openai_temperature: float = 0.7

    @property
    def max_file_bytes(self) -> int:
        return self.max_file_mb * 1024 * 1024
