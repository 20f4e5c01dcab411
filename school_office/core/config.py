from typing import Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    # Can be a comma-separated string or list
    cors_allowed_origins: Union[str, list[str]] = "http://localhost:3000,http://localhost:5173"

    # School
    school_name: str = "Your School Name"
    currency: str = "INR"
    default_academic_year: str = "2024-25"

    # Demo data is loaded into the default store on startup
    seed_sample_data: bool = True

    # Payment schedules closer than this many days are reported as "due soon"
    due_soon_days: int = 7

    default_page_limit: int = 100

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


settings = Settings()
