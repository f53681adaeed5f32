from dataclasses import dataclass
import os

ENV_PREFIX = "BIOIMAGE_METADATA_"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_str(name: str, default: str) -> str:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip() or default


@dataclass(frozen=True)
class Settings:
    log_level: str = _env_str("LOG_LEVEL", "WARNING")
    log_format: str = _env_str("LOG_FORMAT", "console")
    log_redact_fields: str = os.getenv(ENV_PREFIX + "LOG_REDACT_FIELDS", "")
    log_rejections: bool = _env_bool("LOG_REJECTIONS", True)


settings = Settings()
