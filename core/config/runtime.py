"""
Runtime Configuration

Central configuration for the ledger store, the HTTP service and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "AIRDROP_"

# Search order for config files when none is given explicitly
DEFAULT_CONFIG_PATHS = (
    Path("airdrop.json"),
    Path(".airdrop.json"),
    Path("~/.config/airdrop/config.json"),
)


@dataclass
class StoreConfig:
    """Where the ledger lives. path=None keeps it in memory only."""
    path: Optional[str] = None


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    store: StoreConfig = field(default_factory=StoreConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AIRDROP_LEDGER_PATH: Ledger file path
        - AIRDROP_LOG_LEVEL: Log level name
        - AIRDROP_LOG_FILE: Extra log file
        - AIRDROP_API_HOST / AIRDROP_API_PORT: HTTP bind address
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LEDGER_PATH"):
            overrides.setdefault("store", {})["path"] = os.getenv(f"{ENV_PREFIX}LEDGER_PATH")

        if os.getenv(f"{ENV_PREFIX}API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv(f"{ENV_PREFIX}API_HOST")
        if os.getenv(f"{ENV_PREFIX}API_PORT"):
            overrides.setdefault("api", {})["port"] = int(os.getenv(f"{ENV_PREFIX}API_PORT", "8000"))

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Pick the loader from the file extension."""
        if Path(path).suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        store_data = data.get("store", {}) or {}
        api_data = data.get("api", {}) or {}

        return cls(
            store=StoreConfig(**store_data) if store_data else StoreConfig(),
            api=ApiConfig(**api_data) if api_data else ApiConfig(),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> "RuntimeConfig":
        """
        Load from an explicit file, else the first default location found,
        else defaults. Environment variables are always applied last.
        """
        config: RuntimeConfig | None = None
        if path is not None:
            config = cls.from_file(path)
        else:
            for candidate in DEFAULT_CONFIG_PATHS:
                candidate = candidate.expanduser()
                if candidate.exists():
                    config = cls.from_file(candidate)
                    break

        return (config or cls()).with_env_overrides()

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("store", {}).items():
            setattr(new_config.store, key, value)
        for key, value in overrides.get("api", {}).items():
            setattr(new_config.api, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "store": {"path": self.store.path},
            "api": {"host": self.api.host, "port": self.api.port},
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig(store=StoreConfig(path="ledger.json")).to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.load()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set the default runtime configuration (None resets it)."""
    global _default_config
    _default_config = config
