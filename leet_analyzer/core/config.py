import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from leet_analyzer.core.data_utils import load_json, save_json

# Configuration defaults - all constants at the top
CONFIG_FILENAME = "leet_analyzer_config.json"
DEFAULT_NOTES_FOLDER = "LeetCode"
DEFAULT_AI_MODEL = "gemini-2.0-flash"
DEFAULT_AI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_AI_TIMEOUT = 60
DEFAULT_AI_MAX_RETRIES = 3

# Environment variables, highest priority
ENV_API_KEY = "GEMINI_API_KEY"
ENV_VAULT_PATH = "OBSIDIAN_VAULT_PATH"
ENV_NOTES_FOLDER = "OBSIDIAN_NOTES_FOLDER"
ENV_AI_MODEL = "LEET_ANALYZER_MODEL"

# Global configuration instance
_config: Optional["AnalyzerConfig"] = None


def expand_path(value: Optional[str]) -> Optional[str]:
    """Expand a leading ~ to the home directory."""
    if not value:
        return value
    return str(Path(value).expanduser())


@dataclass
class AnalyzerConfig:
    """Main configuration class for Leet Analyzer."""

    gemini_api_key: Optional[str] = None
    obsidian_vault_path: Optional[str] = None
    obsidian_notes_folder: str = DEFAULT_NOTES_FOLDER
    ai_model: str = DEFAULT_AI_MODEL
    ai_base_url: str = DEFAULT_AI_BASE_URL
    ai_timeout: int = DEFAULT_AI_TIMEOUT
    ai_max_retries: int = DEFAULT_AI_MAX_RETRIES
    debug: bool = False

    def __post_init__(self):
        self.obsidian_vault_path = expand_path(self.obsidian_vault_path)

    @classmethod
    def from_file(
        cls, config_path: Optional[Path] = None, use_env: bool = True
    ) -> "AnalyzerConfig":
        """Load configuration from file, then apply environment overrides."""
        config_data = load_config_file(config_path)
        if use_env:
            config_data.update(load_env_overrides())
        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        """Create config from dictionary."""
        config_data = data.copy()

        # Map the camelCase keys of older config files to config fields
        field_mapping = {
            "geminiApiKey": "gemini_api_key",
            "obsidianVaultPath": "obsidian_vault_path",
            "obsidianNotesFolder": "obsidian_notes_folder",
        }
        for json_key, config_key in field_mapping.items():
            if json_key in config_data:
                config_data.setdefault(config_key, config_data.pop(json_key))

        known = set(cls.__dataclass_fields__)
        return cls(**{k: v for k, v in config_data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return asdict(self)

    def save(self, path: Optional[Path] = None) -> Path:
        """Save configuration to file."""
        if path is None:
            path = Path.home() / f".{CONFIG_FILENAME}"
        save_json(str(path), self.to_dict())
        return Path(path)

    def notes_dir(self) -> Optional[Path]:
        """Directory inside the vault that holds the problem notes."""
        if not self.obsidian_vault_path:
            return None
        return Path(self.obsidian_vault_path) / (
            self.obsidian_notes_folder or DEFAULT_NOTES_FOLDER
        )


def load_config_file(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from the first config file found."""
    paths = []

    if config_path:
        paths.append(Path(config_path))

    paths.extend(
        [
            Path.cwd() / CONFIG_FILENAME,
            Path.home() / f".{CONFIG_FILENAME}",
        ]
    )

    for path in paths:
        if path.is_file():
            data = load_json(str(path), default={})
            if isinstance(data, dict):
                return data

    return {}


def load_env_overrides() -> Dict[str, Any]:
    """Read settings from the environment (and a .env file in the cwd)."""
    load_dotenv(Path.cwd() / ".env")

    env_mapping = {
        ENV_API_KEY: "gemini_api_key",
        ENV_VAULT_PATH: "obsidian_vault_path",
        ENV_NOTES_FOLDER: "obsidian_notes_folder",
        ENV_AI_MODEL: "ai_model",
    }
    overrides = {}
    for env_key, config_key in env_mapping.items():
        value = os.environ.get(env_key)
        if value:
            overrides[config_key] = value
    return overrides


def get_config() -> AnalyzerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AnalyzerConfig.from_file()
    return _config


def set_config(config: AnalyzerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
