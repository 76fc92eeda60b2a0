"""Font manager settings (environment / .env driven)."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

DEFAULT_USER_AGENT = "FontManager/1.0"
DEFAULT_HTTP_TIMEOUT = 30.0


class FontManagerSettings(BaseSettings):
    """Font manager configuration.

    Only the CLI reads settings; the library takes paths and sources injected.
    """

    model_config = SettingsConfigDict(
        env_prefix="FM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    user_font_dir: Path | None = Field(None, description="Override for the per-user font directory")
    system_font_dir: Path | None = Field(None, description="Override for the system font directory")
    http_timeout: float = Field(DEFAULT_HTTP_TIMEOUT, gt=0.0, description="HTTP timeout in seconds")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header for source requests")
