"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="sap-mm-ticket-solver", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Knowledge Base ==========
    knowledge_base_path: Optional[Path] = Field(
        default=None,
        description="Path to a custom scenario knowledge base YAML (bundled file when unset)"
    )

    # ========== Solver ==========
    max_text_length: int = Field(
        default=20000,
        description="Maximum ticket text length analysed by the solver",
        ge=100
    )
    confidence_smoothing: float = Field(
        default=4.0,
        description="Smoothing constant K in confidence = score / (score + K)",
        gt=0.0
    )
    fallback_confidence: float = Field(
        default=0.2,
        description="Fixed confidence reported for the unclassified scenario",
        ge=0.0,
        le=1.0
    )
    confidence_floor: float = Field(
        default=0.3,
        description="Lowest confidence reported for a matched scenario",
        ge=0.0,
        lt=1.0
    )
    module_match_bonus: float = Field(
        default=1.0,
        description="Score bonus when the detected module equals the scenario module",
        ge=0.0
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

BUNDLED_KNOWLEDGE_BASE = (
    Path(__file__).resolve().parent.parent / "solver" / "infrastructure" / "data" / "knowledge_base.yaml"
)
