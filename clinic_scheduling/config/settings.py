from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client configuration loaded through Pydantic BaseSettings.
    Values come from environment variables and the optional .env file.
    """

    PROJECT_NAME: str = "Clinic Scheduling Client"
    VERSION: str = "0.1.0"

    # Clinic backend API
    CLINIC_API_BASE_URL: str = Field("http://localhost:8080/api/v1", description="Base URL of the clinic REST API")
    CLINIC_API_TOKEN: str | None = Field(None, description="Bearer token sent on every request")
    CLINIC_API_TIMEOUT: float = Field(30.0, description="Request timeout in seconds")

    # Shift calendar
    SHIFT_PAGE_SIZE: int = Field(100, description="Page size used when loading a month of shifts")
    SLOT_GRANULARITY_MINUTES: int = Field(15, description="Booking grid granularity in minutes")

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.basicConfig format string",
    )

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("CLINIC_API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("SHIFT_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        # A month of shifts for one employee must never be truncated to one short page
        if v < 50:
            raise ValueError("SHIFT_PAGE_SIZE must be at least 50")
        if v > 500:
            raise ValueError("SHIFT_PAGE_SIZE should not exceed 500")
        return v

    @field_validator("SLOT_GRANULARITY_MINUTES")
    @classmethod
    def validate_granularity(cls, v):
        if v <= 0 or 60 % v != 0:
            raise ValueError("SLOT_GRANULARITY_MINUTES must divide 60")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @computed_field
    @property
    def is_development(self) -> bool:
        """Whether the client runs in a development environment"""
        return self.ENVIRONMENT.lower() in ("development", "dev", "local")


_settings_instance = None


def get_settings() -> Settings:
    """
    Return a cached Settings instance.
    Avoids re-reading the environment on every call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
