from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "HalalScan"
    debug: bool = False

    database_url: str = "sqlite:///./halalscan.db"

    vision_api_key: Optional[str] = None
    vision_api_url: str = "https://vision.googleapis.com/v1/images:annotate"
    text_extraction_timeout_seconds: float = 20.0
    text_extraction_max_attempts: int = 3
    text_extraction_backoff_seconds: float = 0.5

    scan_timeout_seconds: float = 45.0
    max_image_bytes: int = 10 * 1024 * 1024

    gibberish_ratio_threshold: float = 0.4
    segmenter_require_anchor: bool = False
    match_strategy: str = "substring"
    match_similarity_threshold: float = 0.85

    learner_enabled: bool = True
    learner_concurrency: int = 4

    rulebook_path: Optional[str] = None

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False


settings = Settings()
