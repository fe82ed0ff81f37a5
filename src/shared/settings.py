from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings for the MAEVA API server, read from ``MAEVA_*`` variables or ``.env``."""

    title: str = Field(default="MAEVA API")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_dir: str | None = Field(default=None, description="Directory for rotating log files; console only if unset")

    model_config = SettingsConfigDict(
        env_prefix="MAEVA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
