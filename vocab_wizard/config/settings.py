"""Configuration management with Pydantic v2 settings style"""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _validate_http_url(v: str, label: str) -> str:
    if not v.startswith(("http://", "https://")):
        raise ValueError(f"{label} URL must start with http:// or https://")
    return v.rstrip("/")


class TranslatorSettings(BaseSettings):
    """LibreTranslate configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    url: str = Field(
        default="http://localhost:5000",
        validation_alias=AliasChoices("LIBRE_TRANSLATE_URL"),
    )
    api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("LIBRE_TRANSLATE_API_KEY")
    )
    timeout: int = Field(default=5, validation_alias=AliasChoices("TRANSLATOR_TIMEOUT"))
    max_redirects: int = Field(
        default=5, validation_alias=AliasChoices("TRANSLATOR_MAX_REDIRECTS")
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate translator URL format"""
        return _validate_http_url(v, "LibreTranslate")

    @field_validator("timeout", "max_redirects")
    @classmethod
    def validate_positive_integers(cls, v: int) -> int:
        """Validate positive integer values"""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v


class DictionarySettings(BaseSettings):
    """Free Dictionary API configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    url: str = Field(
        default="https://api.dictionaryapi.dev",
        validation_alias=AliasChoices("DICTIONARY_API_URL"),
    )
    timeout: int = Field(default=5, validation_alias=AliasChoices("DICTIONARY_TIMEOUT"))
    max_redirects: int = Field(
        default=5, validation_alias=AliasChoices("DICTIONARY_MAX_REDIRECTS")
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate dictionary URL format"""
        return _validate_http_url(v, "Dictionary API")

    @field_validator("timeout", "max_redirects")
    @classmethod
    def validate_positive_integers(cls, v: int) -> int:
        """Validate positive integer values"""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v


class StorageSettings(BaseSettings):
    """Persistence configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"), validation_alias=AliasChoices("VOCAB_DATA_DIR")
    )
    default_user: str = Field(
        default="local", validation_alias=AliasChoices("VOCAB_DEFAULT_USER")
    )

    @field_validator("default_user")
    @classmethod
    def validate_default_user(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Default user cannot be empty")
        return v.strip()


class SchedulerSettings(BaseSettings):
    """Spaced repetition and daily admission configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    timezone: str | None = Field(
        default=None, validation_alias=AliasChoices("VOCAB_TIMEZONE")
    )
    progress_update_attempts: int = Field(
        default=5, validation_alias=AliasChoices("PROGRESS_UPDATE_ATTEMPTS")
    )

    @field_validator("progress_update_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        """Validate retry budget"""
        if v <= 0:
            raise ValueError("Progress update attempts must be positive")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL"))
    file: Path | None = Field(default=None, validation_alias=AliasChoices("LOG_FILE"))

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class AppSettings(BaseSettings):
    """Main application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_nested_delimiter="__", case_sensitive=False, extra="ignore"
    )

    translator: TranslatorSettings = Field(default_factory=TranslatorSettings)
    dictionary: DictionarySettings = Field(default_factory=DictionarySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    debug: bool = Field(default=False, validation_alias=AliasChoices("DEBUG"))
    max_workers: int = Field(default=4, validation_alias=AliasChoices("MAX_WORKERS"))

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        """Validate max workers"""
        if v <= 0 or v > 20:
            raise ValueError("Max workers must be between 1 and 20")
        return v


# Global settings instance
settings = AppSettings()
