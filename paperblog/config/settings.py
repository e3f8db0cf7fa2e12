from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    max_pdf_size_bytes: int = 50 * 1024 * 1024

    image_resolve_timeout_seconds: float = 5.0
    layout_chars_per_page: int = 3000
    logo_max_dimension_px: int = 300
    author_sample_chars: int = 5000

    ai_provider: str = "gemini"
    ai_api_key: str = ""
    ai_model_name: str = ""
    ai_base_url: str = ""
    ai_vision_enabled: bool | None = None
    ai_timeout_seconds: int = 120
    ai_temperature: float = 0.7
    ai_max_output_tokens: int = 8192
    ai_min_request_interval_seconds: float = 4.0

    storage_backend: str = "s3"
    s3_bucket_name: str = "paperblog-images"
    aws_region: str = "us-east-1"
    s3_key_prefix: str = "blog-images"
    s3_public_base_url: str = ""
    local_storage_dir: str = "uploads"
    local_storage_base_url: str = ""
    upload_max_workers: int = 4
