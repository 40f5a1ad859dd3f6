"""
Settings for the portal, read from the environment or a .env file.

API keys default to empty; an operation that needs a missing key fails
with ServiceNotConfiguredError while the rest of the app keeps working.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL (profile sections, users, roles, attendance)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "placement_user"
    postgres_password: str = "password"
    postgres_db: str = "placement_db"

    postgres_pool_size: int = 5
    postgres_max_overflow: int = 10

    # MongoDB (resume versions, analytics log, GridFS buckets)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_timeout_ms: int = 5000
    mongodb_db: str = "placement_docs"
    resume_bucket: str = "resumes"

    # Hosted language model (OpenAI-compatible chat completions)
    llm_api_key: str = ""
    llm_base_url: str = "https://ai.gateway.lovable.dev/v1"
    llm_model: str = "google/gemini-2.5-flash"
    llm_timeout_seconds: float = 60.0

    # Judge0 code execution (RapidAPI)
    judge0_api_key: str = ""
    judge0_base_url: str = "https://judge0-ce.p.rapidapi.com"
    judge0_host: str = "judge0-ce.p.rapidapi.com"

    # PDF-to-text conversion for stored documents
    pdfco_api_key: str = ""
    pdfco_base_url: str = "https://api.pdf.co/v1"

    # Outbound HTTP (judge, conversion)
    http_timeout_seconds: float = 30.0

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Uploads
    max_upload_size_mb: int = 5

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
