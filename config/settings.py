"""Application settings using Pydantic."""
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Number of ranked jobs returned per profile when the caller does not ask
# for a specific count.
DEFAULT_TOP_N = 5

# Row cap applied to both job sources; bounds the batch sent to the
# embedding service.
MAX_CANDIDATE_ROWS = 1000


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///job_recs.db",
        description="SQLAlchemy database URL",
    )

    # Embedding service
    embedding_backend: Literal["http", "hashing"] = Field(
        default="http",
        description="Embedding backend: remote HTTP service or local hashing",
    )
    embedding_api_url: str = Field(
        default=(
            "https://api-inference.huggingface.co/pipeline/feature-extraction/"
            "sentence-transformers/all-MiniLM-L6-v2"
        ),
        description="Feature-extraction endpoint returning one vector per input",
    )
    embedding_api_token: Optional[str] = Field(
        default=None,
        description="Bearer token for the embedding endpoint",
    )
    embedding_timeout_seconds: int = Field(
        default=30,
        description="Timeout for a single embedding batch request (seconds)",
    )
    hashing_dimensions: int = Field(
        default=64,
        description="Vector length produced by the hashing embedder",
    )

    # Ranking
    default_top_n: int = Field(
        default=DEFAULT_TOP_N,
        description="Jobs returned per profile when no top_n is given",
    )
    max_candidate_rows: int = Field(
        default=MAX_CANDIDATE_ROWS,
        description="Maximum job rows loaded from either source",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for a rotating log file",
    )

    # Paths
    config_dir: Path = Field(
        default=Path(__file__).parent,
        description="Configuration directory",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return self.config_dir.parent


# Global settings instance
settings = Settings()
