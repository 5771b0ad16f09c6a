from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import DotEnvSettingsSource, PydanticBaseSettingsSource


class Settings(BaseSettings):
    """
    Settings for the xivoice MCP server.

    Values come from the process environment, a project ``.env`` file and the
    user-level ``~/.xivoice/.env`` file, in that order of precedence.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings source precedence to include a user-level env file.

        Precedence (highest to lowest):
        - init_settings (explicit kwargs)
        - env_settings (process environment)
        - dotenv_settings (project .env)
        - user_dotenv_settings (~/.xivoice/.env)
        - file_secret_settings
        """

        user_env_path = Path.home() / ".xivoice" / ".env"
        user_dotenv_settings = DotEnvSettingsSource(
            settings_cls,
            env_file=user_env_path,
            env_file_encoding="utf-8",
        )

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            user_dotenv_settings,
            file_secret_settings,
        )

    api_key: str | None = Field(
        default=None,
        description="API key for the ElevenLabs API",
        validation_alias="ELEVENLABS_API_KEY",
    )

    max_retries: int = Field(
        default=3,
        ge=0,
        description="Maximum number of retries for transient request failures",
        validation_alias="MAX_RETRIES",
    )

    retry_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Base delay in milliseconds for exponential backoff",
        validation_alias="RETRY_DELAY_MS",
    )

    output_dir: str = Field(
        default=".",
        description="Directory for generated audio when no output path is given",
        validation_alias="OUTPUT_DIR",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level used by the CLI",
        validation_alias="XIVOICE_LOG_LEVEL",
    )


def get_settings() -> Settings:
    """Read the settings from the current environment."""
    return Settings()
