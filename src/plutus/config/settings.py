"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from dataclasses import dataclass

from plutus.utils.exceptions import ConfigError


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

    # LLM
    llm_model_name: str

    # Charts
    daily_window: int
    weekly_window: int
    monthly_window: int

    # Category matching
    category_fuzzy_threshold: int

    # Paths
    data_dir: str
    database_file: str
    logs_dir: str
    log_file: str
    exports_dir: str

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv("PLUTUS_CONFIG")
            config_path = Path(env_path) if env_path else Path(__file__).parent / "config.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        try:
            return cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                log_max_file_size_mb=config["logging"]["max_file_size_mb"],
                log_backup_count=config["logging"]["backup_count"],
                llm_model_name=config["llm"]["model_name"],
                daily_window=config["charts"]["daily_window"],
                weekly_window=config["charts"]["weekly_window"],
                monthly_window=config["charts"]["monthly_window"],
                category_fuzzy_threshold=config["matching"]["category_fuzzy_threshold"],
                data_dir=config["paths"]["data_dir"],
                database_file=config["paths"]["database_file"],
                logs_dir=config["paths"]["logs_dir"],
                log_file=config["paths"]["log_file"],
                exports_dir=config["paths"]["exports_dir"],
            )
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Invalid configuration file {config_path}: missing {e}")

    @property
    def data_path(self) -> Path:
        """Root data directory; ``PLUTUS_HOME`` takes precedence."""
        return Path(os.getenv("PLUTUS_HOME") or self.data_dir).expanduser()

    @property
    def database_path(self) -> Path:
        return self.data_path / self.database_file

    @property
    def logs_path(self) -> Path:
        return self.data_path / self.logs_dir

    @property
    def exports_path(self) -> Path:
        return self.data_path / self.exports_dir


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
