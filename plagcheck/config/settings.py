from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    data_dir: str = "data"

    shingle_size: int = Field(default=5, ge=1)
    num_hashes: int = Field(default=128, ge=1)
    minhash_seed: int = 1

    draft_ttl_hours: int = Field(default=24, ge=0)
    min_content_length: int = 50
    default_top_k: int = Field(default=5, ge=1)
    cross_check_categories: list[str] = ["coursework", "diploma"]

    report_access_secret: str = ""

    text_extractor: str = "pdfplumber"
