# workbench_equip/config/settings.py
import logging
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workbench_equip import PLUGIN_NAME
from workbench_equip.config.models import LoggingConfig, ThrottlingConfig


class Settings(BaseSettings):
    CONFIG_PATH: str = f"config/{PLUGIN_NAME}.json"
    LANG_DIR: Optional[str] = None
    REDIS_URL: Optional[str] = None
    DEFAULT_LANGUAGE: str = "en"

    log_level: str = "INFO"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    throttling: ThrottlingConfig = Field(default_factory=ThrottlingConfig)

    @field_validator("REDIS_URL", mode="before")
    @classmethod
    def assemble_redis_dsn(cls, v: Any) -> Optional[str]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if isinstance(v, str) and not v.startswith(("redis://", "rediss://", "unix://")):
            return f"redis://{v}"
        return v

    @field_validator("DEFAULT_LANGUAGE", mode="before")
    @classmethod
    def normalize_language(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("DEFAULT_LANGUAGE должен быть непустым кодом языка, например 'en'.")
        return v.strip().lower()

    @property
    def redis_url(self) -> Optional[str]:
        return self.REDIS_URL

    @property
    def config_path(self) -> str:
        return self.CONFIG_PATH

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )


try:
    settings = Settings()
except ValidationError as e:
    logging.critical(
        "❌ КРИТИЧЕСКАЯ ОШИБКА ВАЛИДАЦИИ НАСТРОЕК. Проверьте .env и переменные окружения.\n%s",
        e,
    )
    raise SystemExit("Ошибки валидации конфигурации.")
