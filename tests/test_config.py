"""Tests for environment-driven configuration."""

import pytest

from svm_pay.config import SVMPayConfig, get_rpc_url, load_config
from svm_pay.networks import DEFAULT_RPC_URLS, SVMNetwork


class TestGetRpcUrl:
    def test_defaults(self) -> None:
        assert get_rpc_url(SVMNetwork.SOLANA) == "https://api.mainnet-beta.solana.com"
        assert get_rpc_url("sonic") == "https://rpc.sonic.game"

    def test_custom_url_wins(self) -> None:
        assert get_rpc_url(SVMNetwork.SOON, "http://localhost:8899") == "http://localhost:8899"

    def test_unsupported_network(self) -> None:
        with pytest.raises(ValueError, match="Unsupported SVM network"):
            get_rpc_url("ethereum")
        with pytest.raises(ValueError, match="Unsupported SVM network"):
            get_rpc_url("ethereum", "http://localhost:8899")

    def test_config_override_and_empty_fallback(self) -> None:
        config = SVMPayConfig(
            rpc_urls={SVMNetwork.SONIC: "https://sonic.internal", SVMNetwork.SOON: ""}
        )
        assert config.rpc_url(SVMNetwork.SONIC) == "https://sonic.internal"
        assert config.rpc_url(SVMNetwork.SOON) == DEFAULT_RPC_URLS[SVMNetwork.SOON]
        assert get_rpc_url(SVMNetwork.ECLIPSE, "") == "https://eclipse.xyz/rpc"


class TestLoadConfig:
    def test_empty_environment_gives_defaults(self) -> None:
        config = load_config(environ={})

        assert config.rpc_urls == DEFAULT_RPC_URLS
        assert config.http_timeout == 30.0
        assert config.commitment == "confirmed"

    def test_environment_overrides(self) -> None:
        config = load_config(
            environ={
                "SVM_PAY_SONIC_RPC_URL": "https://sonic.internal",
                "SVM_PAY_HTTP_TIMEOUT": "5",
                "SVM_PAY_COMMITMENT": "finalized",
            }
        )

        assert config.rpc_url(SVMNetwork.SONIC) == "https://sonic.internal"
        assert config.rpc_url(SVMNetwork.SOLANA) == DEFAULT_RPC_URLS[SVMNetwork.SOLANA]
        assert config.http_timeout == 5.0
        assert config.commitment == "finalized"

    def test_env_file_fills_missing_keys(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "SVM_PAY_ECLIPSE_RPC_URL=https://eclipse.from-file\n"
            "SVM_PAY_SOON_RPC_URL=https://soon.from-file\n"
        )

        config = load_config(
            environ={"SVM_PAY_SOON_RPC_URL": "https://soon.from-env"},
            env_file=str(env_file),
        )

        assert config.rpc_url(SVMNetwork.ECLIPSE) == "https://eclipse.from-file"
        assert config.rpc_url(SVMNetwork.SOON) == "https://soon.from-env"

    def test_missing_env_file_is_ignored(self, tmp_path) -> None:
        config = load_config(environ={}, env_file=str(tmp_path / "missing.env"))
        assert config == SVMPayConfig()

    @pytest.mark.parametrize("timeout", ["soon", "0", "-1"])
    def test_invalid_timeout(self, timeout: str) -> None:
        with pytest.raises(ValueError, match="SVM_PAY_HTTP_TIMEOUT"):
            load_config(environ={"SVM_PAY_HTTP_TIMEOUT": timeout})
