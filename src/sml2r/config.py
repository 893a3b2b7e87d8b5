"""Configuration and environment loading."""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

from sml2r.resources import DEFAULT_PATCHES_DIR

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    patches_dir: Path = Field(default=DEFAULT_PATCHES_DIR, alias="SML2R_PATCHES_DIR")
    output_dir: Path = Field(default=Path("./output"), alias="SML2R_OUTPUT_DIR")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", alias="SML2R_LOG_LEVEL"
    )

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
