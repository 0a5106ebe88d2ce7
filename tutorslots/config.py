"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class BookingDefaults(BaseModel):
    """Default settings for slot generation and booking."""
    horizon_days: int = 14
    display_days: int = 7
    duration_minutes: int = 60

    @field_validator("horizon_days", "display_days", "duration_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure counts and durations are positive."""
        if value <= 0:
            raise ValueError(f"Value must be greater than zero, got {value}")
        return value

    @model_validator(mode="after")
    def validate_display_within_horizon(self) -> "BookingDefaults":
        """Ensure we never try to display more days than we generate."""
        if self.display_days > self.horizon_days:
            raise ValueError("display_days must not exceed horizon_days")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    api_base_url: str = "http://localhost:5000/api"
    api_token: Optional[str] = None
    timezone: Optional[str] = None  # local timezone when unset
    defaults: BookingDefaults = Field(default_factory=BookingDefaults)

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url must start with http:// or https://, got '{value}'")
        return value.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        """Ensure the timezone is a known IANA name."""
        if value is None:
            return value
        try:
            pendulum.timezone(value)
        except (KeyError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Read API and booking settings from a YAML file.

        Args:
            config_path: Location of the tutorslots config file

        Raises:
            FileNotFoundError: If there is no file at ``config_path``
            ValueError: If the YAML is broken or a setting fails validation
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"No tutorslots config at {config_path}. "
                "Copy config.example.yaml to config.yaml or pass --mock to use the bundled tutors."
            )

        raw = config_path.read_text(encoding="utf-8")
        try:
            settings = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"Could not parse {config_path.name}: {exc}") from exc

        if settings is None:
            return cls()
        if not isinstance(settings, dict):
            raise ValueError(
                f"{config_path.name} must define settings as key: value pairs, "
                f"got {type(settings).__name__}"
            )

        return cls(**settings)


def get_default_config_path() -> Path:
    """Resolve config.yaml from the working directory, else from the checkout root."""
    local_config = Path.cwd() / "config.yaml"
    if local_config.exists():
        return local_config

    return Path(__file__).resolve().parent.parent / "config.yaml"
