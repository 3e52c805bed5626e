"""
Runtime Configuration Module

Provides configuration loading and management for the airdrop service.
"""

from .runtime import (
    ApiConfig,
    RuntimeConfig,
    StoreConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "ApiConfig",
    "RuntimeConfig",
    "StoreConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
