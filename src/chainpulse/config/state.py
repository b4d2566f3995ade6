"""
Unified configuration state for chainpulse.

Single source of truth for the dashboard configuration, combining YAML files
with environment overrides, type validation and sensible defaults.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chainpulse.ingestion.config.value_objects import HttpClientConfig, JsonRpcConfig

logger = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class ProviderConfig(BaseModel):
    """Upstream JSON-RPC endpoint configuration."""

    model_config = ConfigDict(extra="allow")

    rpc_url: str = Field(default="http://localhost:8545")
    timeout: float = Field(default=10.0, gt=0)
    connect_timeout: float = Field(default=5.0, gt=0)
    verify_ssl: bool = Field(default=True)
    max_concurrency: int | None = Field(default=None, ge=1)

    @field_validator("rpc_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if v.startswith(("http://", "https://")):
            return v
        raise ValueError("rpc_url must start with http:// or https://")

    def to_rpc_config(self) -> JsonRpcConfig:
        """Value object handed to JsonRpcProvider."""
        return JsonRpcConfig(
            rpc_url=self.rpc_url,
            http_config=HttpClientConfig(
                timeout=self.timeout,
                connect_timeout=self.connect_timeout,
                verify_ssl=self.verify_ssl,
            ),
        )


class DashboardConfig(BaseModel):
    """What to track and how often to refresh."""

    model_config = ConfigDict(extra="allow")

    token_address: str = Field(default="")
    window_size: int = Field(default=10, ge=1, le=256)
    refresh_interval: float = Field(default=12.0, gt=0, description="Seconds")

    @field_validator("token_address")
    @classmethod
    def validate_token_address(cls, v: str) -> str:
        v = v.strip()
        if not v or _ADDRESS_RE.match(v):
            return v
        raise ValueError("token_address must be a 0x-prefixed 20-byte hex address")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)
    include_timestamp: bool = Field(default=True)


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for all app config.
    """

    model_config = ConfigDict(extra="allow")

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration from YAML files.

    Merges:
      1. Global defaults (model defaults)
      2. YAML files from config_dir
      3. config_dir/env/<env>.yaml
      4. Environment variable overrides
    """

    CONFIG_FILES = ("provider.yaml", "dashboard.yaml", "logging.yaml")

    def __init__(self, config_dir: str = "./config", env: str | None = None):
        self.config_dir = Path(config_dir)
        self.env = env or os.getenv("CHAINPULSE_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if rpc_url := os.getenv("CHAINPULSE_RPC_URL"):
            config.setdefault("provider", {})["rpc_url"] = rpc_url

        if rpc_timeout := os.getenv("CHAINPULSE_RPC_TIMEOUT"):
            config.setdefault("provider", {})["timeout"] = rpc_timeout

        if token := os.getenv("CHAINPULSE_TOKEN_ADDRESS"):
            config.setdefault("dashboard", {})["token_address"] = token

        if window := os.getenv("CHAINPULSE_WINDOW_SIZE"):
            config.setdefault("dashboard", {})["window_size"] = window

        if interval := os.getenv("CHAINPULSE_REFRESH_INTERVAL"):
            config.setdefault("dashboard", {})["refresh_interval"] = interval

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        if json_logs := os.getenv("LOG_JSON"):
            config.setdefault("logging", {})["json_logs"] = json_logs

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        logger.info(f"Loading configuration from {self.config_dir} (env: {self.env})")

        config: dict[str, Any] = {}
        for config_file in self.CONFIG_FILES:
            config = self._merge_dicts(
                config, self._load_yaml(self.config_dir / config_file)
            )

        env_config = self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        config = self._merge_dicts(config, env_config)

        config = self._apply_env_overrides(config)

        state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        logger.info(
            f"Configuration loaded: window={state.dashboard.window_size} blocks, "
            f"refresh={state.dashboard.refresh_interval}s, "
            f"token={'set' if state.dashboard.token_address else 'unset'}"
        )
        return state


def get_config(config_dir: str | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to $CHAINPULSE_CONFIG_DIR or ./config
    """
    if config_dir is None:
        config_dir = os.getenv("CHAINPULSE_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            logger.warning(f"Config directory not found at {config_dir}, using defaults")

    return ConfigLoader(config_dir=config_dir).load()


__all__ = [
    "ConfigLoader",
    "ConfigState",
    "DashboardConfig",
    "LoggingConfig",
    "ProviderConfig",
    "get_config",
]
