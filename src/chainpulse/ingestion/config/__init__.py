from .value_objects import HttpClientConfig, JsonRpcConfig

__all__ = ["HttpClientConfig", "JsonRpcConfig"]
