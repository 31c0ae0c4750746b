#!/usr/bin/env python3
"""Construction of the SDK objects used by the demo.

The builder turns a DemoConfig into an Instance holding the signer, the
layer-2 provider and wallet, the raw layer-1 RPC client and the
layer-1-facing provider. Each step depends on the one before it, and the
first failure aborts the whole build.
"""

import logging
from dataclasses import dataclass

from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3
from zksync2.account.wallet_l1 import WalletL1
from zksync2.account.wallet_l2 import WalletL2
from zksync2.module.module_builder import ZkSyncBuilder
from zksync2.signer.eth_signer import PrivateKeyEthSigner

from .config import DemoConfig
from .errors import InstanceError

logger = logging.getLogger(__name__)


def decode_private_key(account_pk: str) -> bytes:
    """Decode a hex private key (with or without 0x prefix) into raw bytes.

    Raises:
        InstanceError: If the string is empty, has an odd digit count or is not valid hex
    """
    digits = account_pk.removeprefix("0x").removeprefix("0X")
    if len(digits) % 2:
        raise InstanceError("Invalid private key encoding: odd number of hex digits")

    try:
        raw = bytes(HexBytes(account_pk))
    except (TypeError, ValueError) as e:
        raise InstanceError(f"Invalid private key encoding: {e}") from e

    if not raw:
        raise InstanceError("Invalid private key encoding: key is empty")
    return raw


@dataclass
class Instance:
    """Everything needed to talk to both chains as the demo account.

    Attributes:
        account: Local account derived from the private key
        signer: zkSync signer bound to the layer-2 chain id
        zk_provider: Web3 client for the layer-2 node (with ``zksync`` module)
        eth_rpc: Raw Web3 client for the layer-1 node
        wallet: Layer-2 wallet used for balances, transfers and withdrawals
        eth_provider: Layer-1 facing wallet used for deposits
    """

    account: LocalAccount
    signer: PrivateKeyEthSigner
    zk_provider: Web3
    eth_rpc: Web3
    wallet: WalletL2
    eth_provider: WalletL1

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return Web3.to_checksum_address(self.account.address)

    @classmethod
    def from_config(cls, config: DemoConfig) -> "Instance":
        return build_instance(config)


def build_instance(config: DemoConfig) -> Instance:
    """
    Build an Instance from configuration, failing fast on the first error.

    :param config: Loaded demo configuration
    :return: Fully constructed Instance
    :raises InstanceError: If key decoding, signer creation, endpoint
        connection or wallet construction fails
    """
    logger.debug("Decoding account private key...")
    raw_key = decode_private_key(config.account_pk)

    try:
        logger.debug(f"Creating signer for chain {config.zk_chain_id}")
        account: LocalAccount = Account.from_key(raw_key)
        signer = PrivateKeyEthSigner(account, config.zk_chain_id)
    except Exception as e:
        logger.error(f"Signer creation failed: {e}")
        raise InstanceError(f"Failed to create signer: {e}") from e

    try:
        logger.debug(f"Connecting to zkSync node at {config.zk_url}")
        zk_provider: Web3 = ZkSyncBuilder.build(config.zk_url)
        if not zk_provider.is_connected():
            raise InstanceError(f"Failed to connect to zkSync node at {config.zk_url}")

        logger.debug(f"Connecting to Ethereum node at {config.eth_url}")
        eth_rpc = Web3(Web3.HTTPProvider(config.eth_url))
        if not eth_rpc.is_connected():
            raise InstanceError(f"Failed to connect to Ethereum node at {config.eth_url}")

        logger.debug("Creating layer-2 wallet...")
        wallet = WalletL2(zk_provider, eth_rpc, account)

        logger.debug("Creating layer-1 provider from wallet...")
        eth_provider = WalletL1(zk_provider, eth_rpc, account)
    except InstanceError as e:
        logger.error(f"Instance construction failed: {e}")
        raise
    except Exception as e:
        logger.error(f"Instance construction failed: {e}", exc_info=True)
        raise InstanceError(f"generate instance failed, err: {e}") from e

    instance = Instance(
        account=account,
        signer=signer,
        zk_provider=zk_provider,
        eth_rpc=eth_rpc,
        wallet=wallet,
        eth_provider=eth_provider,
    )
    logger.info(f"Instance ready for account {instance.address}")
    return instance
