"""Centralized configuration management using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36 scraperx"
)


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCRAPERX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="scraperx", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_to_file: bool = Field(default=False, description="Also write logs to rotating files")
    logs_path: str = Field(default="./logs", description="Directory for log files")

    # Parsing
    html_parser: Literal["lxml", "html.parser", "html5lib"] = Field(
        default="lxml", description="BeautifulSoup parser backend"
    )

    # HTTP
    http_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    http_user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header")
    http_follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    http_verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    # Extraction
    drop_empty_records: bool = Field(
        default=True, description="Drop records whose fields are all empty"
    )
    strict_filters: bool = Field(
        default=False, description="Reject unknown filter names when compiling selectors"
    )
    default_max_pages: int = Field(
        default=-1, description="Page budget for crawls (-1 means unbounded)"
    )

    @field_validator("default_max_pages")
    @classmethod
    def validate_max_pages(cls, v: int) -> int:
        """Ensure the page budget is -1 or a positive number."""
        if v != -1 and v < 1:
            raise ValueError("default_max_pages must be -1 or >= 1")
        return v

    @property
    def logs_dir(self) -> Path:
        """Get logs directory path."""
        path = Path(self.logs_path)
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
