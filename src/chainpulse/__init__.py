"""
Chainpulse: per-block chain metrics for a refreshing dashboard.

Modules:
- ingestion: Provider ports, JSON-RPC adapter, block window fetcher
- transformation: Base fee, gas usage and ERC-20 transfer volume series
- orchestration: Dashboard snapshots and the refresh loop
- shared: Domain models and exceptions
- infrastructure: Structured logging
- config: YAML + environment configuration
"""

__version__ = "0.1.0"
