"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Reads a root .env file first when one exists (python-dotenv).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

# Single .env at the project root
root_env = BASE_DIR / ".env"
if root_env.exists():
    load_dotenv(root_env)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data
    resources_json_path: Path = BASE_DIR / "data" / "resources.json"
    history_path: Path = BASE_DIR / "cache" / "search_history.json"
    # Optional JSON file with recommendation weights/limits/diversity
    recommendation_config_path: Optional[Path] = None

    # Search history cap for the /api/search/history endpoints
    max_search_history: int = 50

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            resources_json_path=_path_env("RESOURCES_JSON_PATH", BASE_DIR / "data" / "resources.json"),
            history_path=_path_env("HISTORY_PATH", BASE_DIR / "cache" / "search_history.json"),
            recommendation_config_path=_path_env("RECOMMENDATION_CONFIG_PATH"),
            max_search_history=int(os.getenv("MAX_SEARCH_HISTORY", "50")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.resources_json_path.exists():
            errors.append(f"Resources file not found: {self.resources_json_path}")

        if self.recommendation_config_path and not self.recommendation_config_path.exists():
            errors.append(f"Recommendation config not found: {self.recommendation_config_path}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        if self.max_search_history <= 0:
            errors.append(f"MAX_SEARCH_HISTORY must be positive, got {self.max_search_history}")

        # History file is created on first write

        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create required directories if they don't exist."""
        self.history_path.parent.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
