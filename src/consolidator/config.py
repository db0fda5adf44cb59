"""Application configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CONSOLIDATOR_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Tote Consolidation Planner API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level applied at startup.")
    section_capacity: int = Field(
        default=40,
        ge=1,
        description="Maximum totes a single section may hold after consolidation.",
    )
    consignment_threshold: int = Field(
        default=9,
        ge=0,
        description="Consignments that can be dispatched without an extra consolidation route.",
    )
    trollies_per_section: int = Field(default=2, ge=0)
    target_selection: Literal["first_fit", "best_fit"] = Field(
        default="first_fit",
        description="Rule used by the planner to pick a merge target.",
    )
    allow_chained_targets: bool = Field(
        default=True,
        description="Let a section that already received totes be merged onward with its running total.",
    )
    load_status_thresholds: tuple[int, int] = Field(
        default=(20, 30),
        description="Tote counts at which a section turns orange, then red.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("load_status_thresholds", mode="before")
    @classmethod
    def _parse_int_pair_from_env(cls, value: Any) -> tuple[int, ...]:
        """Parse the threshold pair from a JSON array or a comma-separated string."""
        if isinstance(value, (tuple, list)):
            return tuple(int(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(int(item) for item in parsed)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            return tuple(int(item.strip()) for item in value.split(",") if item.strip())
        return value

    @field_validator("load_status_thresholds")
    @classmethod
    def _check_threshold_order(cls, value: tuple[int, int]) -> tuple[int, int]:
        low, high = value
        if low > high:
            raise ValueError("load_status_thresholds must be ascending")
        return value


settings = Settings()
