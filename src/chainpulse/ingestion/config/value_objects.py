"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific configuration
dataclasses into each component. Enables:
- Easy testing with different configurations
- Clear constructor contracts
- Validation at composition root
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 10.0
    connect_timeout: float = 5.0
    verify_ssl: bool = True


@dataclass(frozen=True)
class JsonRpcConfig:
    """Configuration for a JSON-RPC provider endpoint."""

    rpc_url: str
    http_config: HttpClientConfig = None

    def __post_init__(self):
        """Set defaults for nested configs."""
        if not self.rpc_url:
            raise ValueError("rpc_url must not be empty")
        if self.http_config is None:
            object.__setattr__(self, "http_config", HttpClientConfig())
