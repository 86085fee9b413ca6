"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Courier Ledger API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for generated exports.")
    log_level: str = Field(default="INFO", description="Root logging level applied by create_app().")

    courier_rate: float = Field(
        default=14.0,
        ge=0.0,
        description="Pay per unit of work (delivered parcel or reverse pickup) shared by every area.",
    )
    area_rates: Annotated[dict[str, float], NoDecode] = Field(
        default={"BHILAI_3": 19.0, "CHARODA": 35.0},
        description="Company billing rate per area code.",
    )
    area_names: dict[str, str] = Field(
        default={"BHILAI_3": "Bhilai-3", "CHARODA": "Charoda"},
        description="Display names for area codes.",
    )
    courier_rate_overrides: Annotated[dict[str, float], NoDecode] = Field(
        default_factory=dict,
        description="Optional per-area courier pay rates replacing the global courier_rate.",
    )
    rvp_area: str = Field(
        default="BHILAI_3",
        description="Area whose rates apply to reverse pickups, which carry no area of their own.",
    )

    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:9002",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

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

    @field_validator("area_rates", "courier_rate_overrides", mode="before")
    @classmethod
    def _parse_rate_mapping(cls, value: Any) -> dict[str, float]:
        """Parse ``CODE:rate`` pairs (comma-separated or JSON object) into a rate mapping."""
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(code).strip().upper(): float(rate) for code, rate in value.items()}
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, dict):
                    return {str(code).strip().upper(): float(rate) for code, rate in parsed.items()}
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            rates: dict[str, float] = {}
            for chunk in value.split(","):
                if ":" not in chunk:
                    continue
                code, _, rate = chunk.partition(":")
                if code.strip():
                    rates[code.strip().upper()] = float(rate)
            return rates
        return value

    @field_validator("rvp_area", mode="before")
    @classmethod
    def _normalise_area_code(cls, value: Any) -> str:
        return str(value).strip().upper()


settings = Settings()
