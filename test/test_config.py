#!/usr/bin/env python3
"""Tests for the configuration module."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from zksync_demo.config import DemoConfig
from zksync_demo.errors import ConfigError, DemoError


VALID_DATA = {
    "account_pk": "0x" + "a" * 64,
    "zk_url": "https://testnet.era.zksync.dev",
    "eth_url": "https://rpc.ankr.com/eth_goerli",
    "zk_chain_id": 280,
}


def write_config(tmp_path, content):
    """Write a config file and return its path."""
    path = tmp_path / "config.json"
    if isinstance(content, str):
        path.write_text(content)
    else:
        path.write_text(json.dumps(content))
    return path


class TestDemoConfig:
    """Tests for DemoConfig validation."""

    def test_valid_config(self):
        """Test creating a valid configuration."""
        config = DemoConfig(**VALID_DATA)

        assert config.account_pk == VALID_DATA["account_pk"]
        assert config.zk_url == "https://testnet.era.zksync.dev"
        assert config.eth_url == "https://rpc.ankr.com/eth_goerli"
        assert config.zk_chain_id == 280

    def test_websocket_urls_accepted(self):
        """Test that WebSocket URLs are accepted."""
        config = DemoConfig(**{**VALID_DATA, "zk_url": "wss://node", "eth_url": "ws://node"})
        assert config.zk_url == "wss://node"

    def test_invalid_url_scheme(self):
        """Test that invalid URL schemes are rejected."""
        with pytest.raises(ConfigError, match="Invalid zk_url scheme"):
            DemoConfig(**{**VALID_DATA, "zk_url": "ftp://invalid.scheme"})

        with pytest.raises(ConfigError, match="Invalid eth_url scheme"):
            DemoConfig(**{**VALID_DATA, "eth_url": "localhost:8545"})

    def test_missing_url(self):
        """Test that empty URLs raise an error."""
        with pytest.raises(ConfigError, match="eth_url must be a non-empty URL"):
            DemoConfig(**{**VALID_DATA, "eth_url": ""})

    def test_empty_private_key(self):
        """Test that an empty private key is rejected."""
        with pytest.raises(ConfigError, match="account_pk"):
            DemoConfig(**{**VALID_DATA, "account_pk": ""})

    def test_private_key_not_hex_checked_here(self):
        """Hex decoding belongs to the instance builder, not the loader."""
        config = DemoConfig(**{**VALID_DATA, "account_pk": "not-hex"})
        assert config.account_pk == "not-hex"

    def test_chain_id_validation(self):
        """Test chain id type and range validation."""
        with pytest.raises(ConfigError, match="zk_chain_id must be an integer"):
            DemoConfig(**{**VALID_DATA, "zk_chain_id": "280"})

        with pytest.raises(ConfigError, match="zk_chain_id must be an integer"):
            DemoConfig(**{**VALID_DATA, "zk_chain_id": True})

        with pytest.raises(ConfigError, match="zk_chain_id must be positive"):
            DemoConfig(**{**VALID_DATA, "zk_chain_id": 0})

    def test_config_error_is_value_error(self):
        """Config errors are catchable as ValueError and DemoError."""
        with pytest.raises(ValueError):
            DemoConfig(**{**VALID_DATA, "zk_chain_id": -1})
        assert issubclass(ConfigError, DemoError)

    def test_immutability(self):
        """Test that configuration is immutable."""
        config = DemoConfig(**VALID_DATA)

        with pytest.raises(AttributeError):
            config.zk_url = "https://other"


class TestFromDict:
    """Tests for DemoConfig.from_dict."""

    def test_from_dict(self):
        config = DemoConfig.from_dict(VALID_DATA)
        assert config == DemoConfig(**VALID_DATA)

    def test_extra_keys_ignored(self):
        config = DemoConfig.from_dict({**VALID_DATA, "comment": "goerli"})
        assert config.zk_chain_id == 280

    def test_missing_keys(self):
        data = {k: v for k, v in VALID_DATA.items() if k not in ("eth_url", "zk_chain_id")}

        with pytest.raises(ConfigError, match="Missing required config keys: eth_url, zk_chain_id"):
            DemoConfig.from_dict(data)

    def test_not_an_object(self):
        with pytest.raises(ConfigError, match="Config must be a JSON object, got list"):
            DemoConfig.from_dict([VALID_DATA])


class TestFromFile:
    """Tests for loading configuration from disk."""

    def test_from_file(self, tmp_path):
        """A well-formed file with all four keys populates the record."""
        path = write_config(tmp_path, {
            "account_pk": "0x01",
            "zk_url": "http://mock-l2",
            "eth_url": "http://mock-l1",
            "zk_chain_id": 270,
        })

        config = DemoConfig.from_file(path)

        assert config.account_pk == "0x01"
        assert config.zk_url == "http://mock-l2"
        assert config.eth_url == "http://mock-l1"
        assert config.zk_chain_id == 270

    def test_from_file_relative_to_cwd(self, tmp_path, monkeypatch):
        """The default path is config.json in the working directory."""
        write_config(tmp_path, VALID_DATA)
        monkeypatch.chdir(tmp_path)

        config = DemoConfig.from_file()

        assert config.zk_chain_id == 280

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="read config file failed"):
            DemoConfig.from_file(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = write_config(tmp_path, '{"account_pk": "0x01",')

        with pytest.raises(ConfigError, match="unmarshal config failed"):
            DemoConfig.from_file(path)

    def test_missing_key_in_file(self, tmp_path):
        path = write_config(tmp_path, {"account_pk": "0x01"})

        with pytest.raises(ConfigError, match="Missing required config keys"):
            DemoConfig.from_file(path)

    @patch.dict(os.environ, {"ZKSYNC_DEMO_CONFIG": "/etc/zksync/demo.json"})
    def test_default_path_from_env(self):
        assert DemoConfig.default_path() == "/etc/zksync/demo.json"

    @patch.dict(os.environ, {}, clear=True)
    def test_default_path(self):
        assert DemoConfig.default_path() == "config.json"


def test_log_config_masks_key(caplog):
    """Test configuration logging hides the private key."""
    config = DemoConfig(**VALID_DATA)

    with caplog.at_level(logging.INFO):
        config.log_config()

    log_text = caplog.text
    assert "zkSync Demo Configuration" in log_text
    assert "https://testnet.era.zksync.dev" in log_text
    assert "L2 Chain ID: 280" in log_text
    assert "Account Key: [CONFIGURED]" in log_text
    assert VALID_DATA["account_pk"] not in log_text
