"""Application settings loader from YAML configuration."""
import yaml
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from rewardflow.utils.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int
    logs_dir: Path

    # Source
    transactions_file: Path

    # Report
    rows_per_page: int
    date_format: str

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a mapping")

        base_dir = config_path.parent
        try:
            settings = cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                log_max_file_size_mb=int(config["logging"]["max_file_size_mb"]),
                log_backup_count=int(config["logging"]["backup_count"]),
                logs_dir=_resolve_path(base_dir, config["logging"]["logs_dir"]),
                transactions_file=_resolve_path(base_dir, config["source"]["transactions_file"]),
                rows_per_page=int(config["report"]["rows_per_page"]),
                date_format=config["report"]["date_format"]
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e!r}")

        if settings.rows_per_page < 1:
            raise ConfigError("report.rows_per_page must be at least 1")

        return settings


def _resolve_path(base_dir: Path, value: str) -> Path:
    """Expand ~ and resolve relative paths against the config directory."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Get or create global settings instance; an explicit path reloads it."""
    global _settings
    if _settings is None or config_path is not None:
        _settings = AppSettings.load(config_path)
    return _settings
