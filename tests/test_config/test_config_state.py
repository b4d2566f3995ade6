"""
Tests for configuration loading: YAML layering, env overrides, validation.
"""

import pytest
from pydantic import ValidationError

from chainpulse.config.state import ConfigLoader, ConfigState, DashboardConfig, ProviderConfig

TOKEN = "0x" + "12" * 20


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "CHAINPULSE_ENV",
        "CHAINPULSE_RPC_URL",
        "CHAINPULSE_RPC_TIMEOUT",
        "CHAINPULSE_TOKEN_ADDRESS",
        "CHAINPULSE_WINDOW_SIZE",
        "CHAINPULSE_REFRESH_INTERVAL",
        "LOG_LEVEL",
        "LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "provider.yaml").write_text(
        "provider:\n  rpc_url: https://mainnet.example/rpc\n  timeout: 4\n"
    )
    (tmp_path / "dashboard.yaml").write_text(
        f"dashboard:\n  token_address: '{TOKEN}'\n  window_size: 10\n"
    )
    (tmp_path / "env").mkdir()
    (tmp_path / "env" / "prod.yaml").write_text("dashboard:\n  window_size: 20\n")
    return tmp_path


class TestDefaults:
    def test_defaults_match_reference_dashboard(self):
        state = ConfigState()

        assert state.dashboard.window_size == 10
        assert state.dashboard.refresh_interval == 12.0
        assert state.dashboard.token_address == ""

    def test_missing_directory_uses_defaults(self, tmp_path):
        state = ConfigLoader(config_dir=str(tmp_path / "nope")).load()

        assert state.provider.rpc_url == "http://localhost:8545"


class TestConfigLoader:
    def test_loads_yaml_files(self, config_dir):
        state = ConfigLoader(config_dir=str(config_dir)).load()

        assert state.provider.rpc_url == "https://mainnet.example/rpc"
        assert state.provider.timeout == 4.0
        assert state.dashboard.token_address == TOKEN

    def test_env_file_overrides_base(self, config_dir):
        state = ConfigLoader(config_dir=str(config_dir), env="prod").load()

        assert state.env == "prod"
        assert state.dashboard.window_size == 20
        assert state.dashboard.token_address == TOKEN

    def test_environment_variables_win(self, config_dir, monkeypatch):
        monkeypatch.setenv("CHAINPULSE_RPC_URL", "https://other.example")
        monkeypatch.setenv("CHAINPULSE_WINDOW_SIZE", "5")
        monkeypatch.setenv("CHAINPULSE_REFRESH_INTERVAL", "3.5")
        monkeypatch.setenv("LOG_JSON", "false")

        state = ConfigLoader(config_dir=str(config_dir), env="prod").load()

        assert state.provider.rpc_url == "https://other.example"
        assert state.dashboard.window_size == 5
        assert state.dashboard.refresh_interval == 3.5
        assert state.logging.json_logs is False

    def test_invalid_env_value_fails_validation(self, config_dir, monkeypatch):
        monkeypatch.setenv("CHAINPULSE_WINDOW_SIZE", "0")

        with pytest.raises(ValidationError):
            ConfigLoader(config_dir=str(config_dir)).load()

    def test_non_mapping_yaml_rejected(self, tmp_path):
        (tmp_path / "dashboard.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            ConfigLoader(config_dir=str(tmp_path)).load()


class TestValidation:
    @pytest.mark.parametrize("address", ["0x1234", "ab" * 20, "0x" + "zz" * 20])
    def test_rejects_bad_token_address(self, address):
        with pytest.raises(ValidationError):
            DashboardConfig(token_address=address)

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValidationError):
            DashboardConfig(refresh_interval=0)

    def test_rejects_non_http_rpc_url(self):
        with pytest.raises(ValidationError):
            ProviderConfig(rpc_url="ws://node:8546")

    def test_provider_config_builds_rpc_value_object(self):
        rpc = ProviderConfig(rpc_url="https://x.example", timeout=3).to_rpc_config()

        assert rpc.rpc_url == "https://x.example"
        assert rpc.http_config.timeout == 3.0
