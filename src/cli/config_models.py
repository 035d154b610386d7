"""Pydantic configuration models for Paceful."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ers.calculator import COMPONENTS, DEFAULT_WEIGHTS


class PathsConfig(BaseModel):
    """File paths configuration."""

    db_path: Path = Path("~/paceful/paceful.db")
    log_file: Path = Path("~/paceful/paceful.log")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db_path = self.db_path.expanduser()
        self.log_file = self.log_file.expanduser()
        return self


class UserConfig(BaseModel):
    """Identity used by CLI commands when --user is not given."""

    default_id: str = "local"

    @field_validator("default_id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user.default_id must not be empty")
        return v


class AnalysisConfig(BaseModel):
    """Text analyzer configuration."""

    analyzer: str = "rules"
    min_words: int = Field(default=5, ge=1)
    notable_limit: int = Field(default=5, ge=0)

    @field_validator("analyzer")
    @classmethod
    def validate_analyzer(cls, v: str) -> str:
        from journal.sentiment import available_analyzers

        if v not in available_analyzers():
            raise ValueError(f"Unknown analyzer: {v}. Must be one of {available_analyzers()}")
        return v


class ERSConfig(BaseModel):
    """Emotional Regulation Score configuration."""

    weights: dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    dead_band: float = Field(default=2.0, ge=0.0)
    mood_window_days: int = Field(default=14, ge=1)
    journal_window_days: int = Field(default=7, ge=1)
    insight_window_days: int = Field(default=14, ge=1)

    @model_validator(mode="after")
    def validate_weights(self):
        """Ensure weights cover every component and sum to 1.0."""
        missing = set(COMPONENTS) - set(self.weights)
        unknown = set(self.weights) - set(COMPONENTS)
        if missing or unknown:
            raise ValueError(
                f"ERS weights must name exactly {list(COMPONENTS)}; "
                f"missing={sorted(missing)} unknown={sorted(unknown)}"
            )
        total = sum(self.weights.values())
        if not 0.99 <= total <= 1.01:
            raise ValueError(f"ERS weights must sum to 1.0, got {total}")
        return self


class APIConfig(BaseModel):
    """Web API settings."""

    jwt_secret: Optional[str] = None  # falls back to PACEFUL_JWT_SECRET
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class PacefulConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    user: UserConfig = Field(default_factory=UserConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    ers: ERSConfig = Field(default_factory=ERSConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand a ${VAR} pattern in the JWT secret."""
        import os

        key = self.api.jwt_secret
        if key and key.startswith("${") and key.endswith("}"):
            self.api.jwt_secret = os.getenv(key[2:-1], "") or None
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "PacefulConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
