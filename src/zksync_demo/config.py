#!/usr/bin/env python3
"""Configuration management for the zkSync demo.

The demo reads a single JSON file (``config.json`` in the working directory
by default) holding the account private key, both RPC endpoints and the
layer-2 chain id. The loaded record is immutable and passed explicitly to
the instance builder.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar
from urllib.parse import urlparse

from .errors import ConfigError

# Get logger for this module
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH: str = "config.json"
CONFIG_PATH_ENV: str = "ZKSYNC_DEMO_CONFIG"


@dataclass(frozen=True, slots=True)
class DemoConfig:
    """Settings needed to reach both chains and sign transactions.

    Attributes:
        account_pk: Hex-encoded private key of the demo account
        zk_url: RPC endpoint of the zkSync (layer-2) node
        eth_url: RPC endpoint of the Ethereum (layer-1) node
        zk_chain_id: Chain id of the layer-2 network
    """

    account_pk: str
    zk_url: str
    eth_url: str
    zk_chain_id: int

    REQUIRED_KEYS: ClassVar[tuple[str, ...]] = (
        "account_pk",
        "zk_url",
        "eth_url",
        "zk_chain_id",
    )
    URL_SCHEMES: ClassVar[set[str]] = {'http', 'https', 'ws', 'wss'}

    def __post_init__(self) -> None:
        """Validate the configuration values."""
        if not isinstance(self.account_pk, str) or not self.account_pk:
            raise ConfigError("account_pk must be a non-empty hex string")

        self._validate_url("zk_url", self.zk_url)
        self._validate_url("eth_url", self.eth_url)

        # bool is an int subclass, reject it explicitly
        if isinstance(self.zk_chain_id, bool) or not isinstance(self.zk_chain_id, int):
            raise ConfigError(
                f"zk_chain_id must be an integer, got {type(self.zk_chain_id).__name__}"
            )
        if self.zk_chain_id <= 0:
            raise ConfigError(f"zk_chain_id must be positive, got {self.zk_chain_id}")

    @classmethod
    def _validate_url(cls, name: str, url: Any) -> None:
        if not isinstance(url, str) or not url:
            raise ConfigError(f"{name} must be a non-empty URL string")

        parsed = urlparse(url)
        if parsed.scheme not in cls.URL_SCHEMES:
            raise ConfigError(
                f"Invalid {name} scheme: {parsed.scheme or '<none>'}. "
                "Expected http, https, ws, or wss"
            )

    @classmethod
    def from_dict(cls, data: Any) -> "DemoConfig":
        """Build a config from an already parsed JSON document.

        Args:
            data: Parsed JSON value, expected to be an object

        Returns:
            DemoConfig populated from the four required keys

        Raises:
            ConfigError: If the document is not an object or a key is missing
        """
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config must be a JSON object, got {type(data).__name__}"
            )

        if missing := [key for key in cls.REQUIRED_KEYS if key not in data]:
            raise ConfigError(f"Missing required config keys: {', '.join(missing)}")

        return cls(
            account_pk=data["account_pk"],
            zk_url=data["zk_url"],
            eth_url=data["eth_url"],
            zk_chain_id=data["zk_chain_id"],
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str] = DEFAULT_CONFIG_PATH) -> "DemoConfig":
        """Load configuration from a JSON file.

        Relative paths are resolved against the current working directory.

        Args:
            path: Location of the config file

        Returns:
            DemoConfig loaded from the file

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        config_path = Path(path)
        logger.debug(f"Reading config file {config_path}")

        try:
            raw = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"read config file failed, err: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"unmarshal config failed, err: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def default_path(cls) -> str:
        """Config path taken from ZKSYNC_DEMO_CONFIG, or ``config.json``."""
        return os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH)

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("zkSync Demo Configuration")
        logger.info("=" * 60)
        logger.info(f"  L2 RPC URL: {self.zk_url}")
        logger.info(f"  L2 Chain ID: {self.zk_chain_id}")
        logger.info(f"  L1 RPC URL: {self.eth_url}")
        logger.info("  Account Key: [CONFIGURED]")
        logger.info("=" * 60)
