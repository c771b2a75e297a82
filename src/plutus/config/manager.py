"""Configuration manager for the advisor credential."""
from dataclasses import dataclass
from typing import Optional

from plutus.config.settings import get_settings
from plutus.ledger.preferences import API_KEY, PreferenceStore


@dataclass
class Config:
    """User configuration."""
    gemini_api_key: str = ""
    model_name: str = ""

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key.strip())


class ConfigManager:
    """Reads and writes user configuration in the preference store."""

    def __init__(self, preferences: PreferenceStore, model_name: Optional[str] = None):
        self.preferences = preferences
        self.model_name = model_name or get_settings().llm_model_name

    def load_config(self) -> Config:
        """Load configuration; an absent key reads as empty."""
        return Config(
            gemini_api_key=self.preferences.get_string(API_KEY) or "",
            model_name=self.model_name,
        )

    def save_config(self, config: Config) -> None:
        self.preferences.set_string(API_KEY, config.gemini_api_key.strip())

    def clear_config(self) -> bool:
        """Forget the saved API key. Returns True if one was stored."""
        return self.preferences.remove(API_KEY)

    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.has_api_key:
            return False, "Gemini API key is required"
        if any(ch.isspace() for ch in config.gemini_api_key.strip()):
            return False, "Gemini API key must not contain whitespace"
        if not config.model_name:
            return False, "Model name is required"
        return True, "Configuration is valid"
