from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === Application ===
    APP_NAME: str = "Workflow Builder"
    APP_VERSION: str = "1.0.0"

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # === Workflow defaults ===
    DEFAULT_WORKFLOW_NAME: str = "My Workflow"
    ROOT_NODE_ID: str = "start"
    ROOT_NODE_LABEL: str = "Start"
    NEW_NODE_LABEL: str = "..."

    # === History ===
    # None keeps every snapshot; a positive value evicts the oldest undo entries.
    HISTORY_MAX_DEPTH: int | None = None

    # === Export ===
    EXPORT_DIR: str = "exports"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("HISTORY_MAX_DEPTH")
    @classmethod
    def validate_history_depth(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("History depth must be positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


try:
    settings = Settings()
except Exception as e:
    import sys

    print(f"CRITICAL: Configuration validation failed: {e}")
    sys.exit(1)
