from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from optima_scheduler import DEFAULT_STRATEGY, default_strategies


class Settings(BaseSettings):
    """Application settings"""

    # API Configuration
    api_title: str = "Optima API"
    api_version: str = "0.1.0"
    api_description: str = "Weekly project scheduling API with selectable strategies"

    # Server Configuration
    host: str = "0.0.0.0"  # nosec B104
    port: int = 8000
    debug: bool = False
    log_level: str = Field(
        default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./optima.db", description="SQLite or PostgreSQL database URL"
    )

    # Scheduling Configuration
    default_strategy: str = Field(
        default=DEFAULT_STRATEGY, description="Strategy selected at startup"
    )
    seed_demo_data: bool = Field(
        default=False, description="Populate an almost empty database with demo projects"
    )

    # Environment
    environment: str = Field(
        default="development", pattern="^(development|staging|production|test)$"
    )

    # CORS Configuration
    cors_origins: list[str] | str = Field(
        default="*",
        description="Allowed CORS origins, as a list or a comma-separated string",
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format"""
        if not v.startswith(("sqlite://", "postgresql://", "postgres://", "postgresql+")):
            raise ValueError("Database URL must be a SQLite or PostgreSQL connection string")
        return v

    @field_validator("default_strategy")
    @classmethod
    def validate_default_strategy(cls, v: str) -> str:
        """Validate the startup strategy against the registered keys"""
        keys = [strategy.key for strategy in default_strategies()]
        if v not in keys:
            raise ValueError(
                f"Unknown scheduling strategy '{v}', expected one of: {', '.join(keys)}"
            )
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list, supporting both list and comma-separated string"""
        if isinstance(self.cors_origins, str):
            return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return self.cors_origins

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


# Global settings instance
settings = Settings()
