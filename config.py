import os
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Application settings
    APP_NAME: str = Field(default="GRC AI Generation Service")
    VERSION: str = Field(default="1.0.0")
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Monitoring and logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_DIRECTORY: str = Field(default="./runtime/logs")
    LOG_TO_FILE: bool = Field(default=False)

    # Database settings; None keeps configurations, templates and logs in memory
    DATABASE_URL: Optional[str] = Field(default=None)

    # YAML file of templates created on startup when missing; None skips seeding
    TEMPLATE_SEED_PATH: Optional[str] = Field(default=None)

    # Local runtime
    OLLAMA_BASE_URL: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="llama3.2")

    # Hosted backends
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1")
    ANTHROPIC_BASE_URL: str = Field(default="https://api.anthropic.com/v1")
    ANTHROPIC_VERSION: str = Field(default="2023-06-01")
    GEMINI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta")

    # Generation defaults
    DEFAULT_TEMPERATURE: float = Field(default=0.7)
    DEFAULT_MAX_TOKENS: int = Field(default=500)
    RISK_CONTROL_MATRIX_MIN_TOKENS: int = Field(default=4000)
    MAX_INPUT_LENGTH: int = Field(default=10000)

    # Timeouts (seconds)
    AVAILABILITY_TIMEOUT_SECONDS: float = Field(default=5.0)
    GENERATION_TIMEOUT_SECONDS: float = Field(default=120.0)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("DEFAULT_TEMPERATURE")
    @classmethod
    def validate_temperature(cls, v):
        if v < 0.0 or v > 2.0:
            raise ValueError("DEFAULT_TEMPERATURE must be between 0.0 and 2.0")
        return v

    @field_validator("DEFAULT_MAX_TOKENS", "RISK_CONTROL_MATRIX_MIN_TOKENS", "MAX_INPUT_LENGTH")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("OLLAMA_BASE_URL", "OPENAI_BASE_URL", "ANTHROPIC_BASE_URL", "GEMINI_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

# Development settings
class DevelopmentSettings(Settings):
    """Development-specific settings."""
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"

# Production settings
class ProductionSettings(Settings):
    """Production-specific settings."""
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"
    LOG_TO_FILE: bool = True

# Testing settings
class TestSettings(Settings):
    """Test-specific settings."""
    __test__ = False

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"
    DATABASE_URL: Optional[str] = None
    TEMPLATE_SEED_PATH: Optional[str] = None
    AVAILABILITY_TIMEOUT_SECONDS: float = 1.0
    GENERATION_TIMEOUT_SECONDS: float = 5.0

def get_settings_for_environment(env: str = None) -> Settings:
    """Get settings based on environment."""
    if env is None:
        env = os.getenv("ENVIRONMENT", "development").lower()

    if env == "production":
        return ProductionSettings()
    elif env == "testing":
        return TestSettings()
    else:
        return DevelopmentSettings()
