"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Game balance (XP coefficients, level curve) and the overload rule are
settings too, so tuning them never touches the progression engine.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.base_xp)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.core.leveling import LevelingConfig, XPFormula
from backend.core.overload_planner import OverloadRule


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    jwt_secret: str = Field(
        default="training-progression-jwt-secret-change-in-production",
        description="Secret key for HS256 access tokens",
    )
    jwt_issuer: str = Field(
        default="training-progression",
        description="Expected issuer of access tokens",
    )
    api_keys: str = Field(
        default="",
        description="Comma-separated list of valid API keys",
    )

    @property
    def api_keys_list(self) -> list[str]:
        """Parse API keys into a list."""
        return [k.strip() for k in self.api_keys.split(",") if k.strip()]

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Workout History
    # -------------------------------------------------------------------------
    history_window: int = Field(
        default=50,
        ge=1,
        description="Recent sessions read when planning the next workout",
    )

    # -------------------------------------------------------------------------
    # Gamification
    # -------------------------------------------------------------------------
    base_xp: float = Field(default=250, gt=0, description="XP for level L is base_xp * L^2")
    xp_base_award: int = Field(default=100, ge=0, description="XP for finishing any session")
    xp_per_minute: int = Field(default=2, ge=0)
    xp_volume_step: float = Field(default=1000, gt=0, description="Volume per bonus step")
    xp_per_volume_step: int = Field(default=5, ge=0)
    xp_volume_cap: int = Field(default=100, ge=0, description="Maximum volume bonus")
    xp_per_set: int = Field(default=5, ge=0)
    xp_per_record: int = Field(default=50, ge=0)

    # -------------------------------------------------------------------------
    # Progressive Overload
    # -------------------------------------------------------------------------
    overload_weight_increment: float = Field(default=2.5, ge=0)
    overload_high_rep_threshold: int = Field(default=10, ge=1)
    overload_rep_drop: int = Field(default=2, ge=0)
    overload_min_reps: int = Field(default=6, ge=0)
    overload_rep_step: int = Field(default=1, ge=0)

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"

    def leveling_config(self) -> LevelingConfig:
        return LevelingConfig(base_xp=self.base_xp)

    def xp_formula(self) -> XPFormula:
        return XPFormula(
            base_award=self.xp_base_award,
            per_minute=self.xp_per_minute,
            volume_step=self.xp_volume_step,
            per_volume_step=self.xp_per_volume_step,
            volume_cap=self.xp_volume_cap,
            per_set=self.xp_per_set,
            per_record=self.xp_per_record,
        )

    def overload_rule(self) -> OverloadRule:
        return OverloadRule(
            weight_increment=self.overload_weight_increment,
            high_rep_threshold=self.overload_high_rep_threshold,
            rep_drop=self.overload_rep_drop,
            min_reps=self.overload_min_reps,
            rep_step=self.overload_rep_step,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
