from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    data_dir: Path = Path("./data")
    log_level: str = "INFO"
    preview_placeholders: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SLE_",
        env_file_encoding="utf-8",
    )

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def db_path(self) -> Path:
        return self.data_dir / "pages.json"

    @property
    def theme_yaml_path(self) -> Path:
        return self.data_dir / "theme.yaml"

    @property
    def output_dir(self) -> Path:
        return self.data_dir / "output"
