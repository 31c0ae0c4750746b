#!/usr/bin/env python3
"""Deposit, transfer and withdrawal runs against a built Instance.

Each operation reads the tracked balance, submits one transaction through
the SDK, waits a fixed delay so the network can include it, then reads the
balance again and prints both values.
"""

import logging
import sys
import time
from collections.abc import Callable
from typing import Any, TextIO

from web3 import Web3
from zksync2.core.types import (
    DepositTransaction,
    Token,
    TransferTransaction,
    WithdrawTransaction,
)

from .errors import OperationError
from .instance import Instance
from .models import (
    CONFIRMATION_DELAY,
    TRANSFER_DESTINATION,
    Operation,
    OperationResult,
    ReceiptSummary,
)

logger = logging.getLogger(__name__)

BANNER_WIDTH: int = 97


def _to_hex(tx_hash: Any) -> str:
    """Normalize an SDK transaction hash (bytes or str) to a 0x string."""
    if isinstance(tx_hash, str):
        return tx_hash if tx_hash.startswith("0x") else f"0x{tx_hash}"
    return Web3.to_hex(tx_hash)


class OperationRunner:
    """Runs one demo operation and reports progress on an output stream."""

    def __init__(
        self,
        instance: Instance,
        delay: float = CONFIRMATION_DELAY,
        out: TextIO | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the OperationRunner.

        Args:
            instance: Built SDK objects for the demo account
            delay: Seconds to wait after submission before re-reading balances
            out: Stream for progress lines (defaults to stdout)
            sleep: Blocking sleep function, replaceable in tests
        """
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")

        self.instance: Instance = instance
        self.delay: float = delay
        self.out: TextIO = out if out is not None else sys.stdout
        self.sleep: Callable[[float], None] = sleep
        self.eth: Token = Token.create_eth()

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def _banner(self, operation: Operation) -> None:
        self._print("=" * BANNER_WIDTH)
        self._print(f"test {operation.value} :")
        self._print(operation.description)
        self._print()
        self._print()

    def get_balance(self, address: str) -> int:
        """Layer-2 ETH balance of ``address`` at the committed block.

        Raises:
            OperationError: If the balance query fails
        """
        try:
            return self.instance.zk_provider.zksync.zks_get_balance(address)
        except Exception as e:
            raise OperationError(f"balance query for {address} failed, err: {e}") from e

    def run(self, operation: Operation, amount: int | None = None) -> OperationResult:
        """
        Run exactly one operation.

        Args:
            operation: Which operation to run
            amount: Amount in wei; defaults to the operation's fixed amount

        Returns:
            OperationResult with the hash and both balance snapshots

        Raises:
            OperationError: If any SDK call fails
        """
        if amount is None:
            amount = operation.default_amount
        if amount <= 0:
            raise ValueError(f"Amount must be positive, got {amount}")

        logger.info(f"Running {operation.value} of {amount} wei")

        match operation:
            case Operation.DEPOSIT:
                return self.deposit(amount)
            case Operation.TRANSFER:
                return self.transfer(amount)
            case Operation.WITHDRAWAL:
                return self.withdrawal(amount)
            case _:
                raise ValueError(f"Unknown operation: {operation}")

    def deposit(self, amount: int = Operation.DEPOSIT.default_amount) -> OperationResult:
        """Deposit native ETH from layer-1 to the signer's own layer-2 address."""
        self._banner(Operation.DEPOSIT)

        to = self.instance.address
        balance_before = self.get_balance(to)

        try:
            tx_hash = _to_hex(self.instance.eth_provider.deposit(
                DepositTransaction(token=self.eth.l1_address, amount=amount, to=to)
            ))
        except Exception as e:
            logger.error(f"Deposit submission failed: {e}")
            raise OperationError(f"deposit failed, err: {e}") from e

        self._print(f"deposit success {tx_hash}")
        self._wait()

        balance_after = self.get_balance(to)
        self._print(
            f"before deposit amount {balance_before}, after deposit amount {balance_after}"
        )
        return OperationResult(
            operation=Operation.DEPOSIT,
            tx_hash=tx_hash,
            destination=to,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
        )

    def transfer(self, amount: int = Operation.TRANSFER.default_amount) -> OperationResult:
        """Transfer native ETH on layer-2 to the fixed demo recipient."""
        self._banner(Operation.TRANSFER)

        to = TRANSFER_DESTINATION
        balance_before = self.get_balance(to)

        try:
            tx_hash = _to_hex(self.instance.wallet.transfer(
                TransferTransaction(to=to, amount=amount, token_address=self.eth.l2_address)
            ))
        except Exception as e:
            logger.error(f"Transfer submission failed: {e}")
            raise OperationError(f"transfer failed, err: {e}") from e

        self._print(f"transfer success {tx_hash}")
        self._wait()

        try:
            receipt = ReceiptSummary.from_receipt(
                self.instance.zk_provider.zksync.get_transaction_receipt(tx_hash)
            )
        except Exception as e:
            raise OperationError(f"receipt lookup for {tx_hash} failed, err: {e}") from e
        self._print(str(receipt))

        balance_after = self.get_balance(to)
        self._print(
            f"before transfer amount {balance_before}, after transfer amount {balance_after}"
        )
        return OperationResult(
            operation=Operation.TRANSFER,
            tx_hash=tx_hash,
            destination=to,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            receipt=receipt,
        )

    def withdrawal(self, amount: int = Operation.WITHDRAWAL.default_amount) -> OperationResult:
        """Withdraw native ETH from layer-2 back to the signer on layer-1."""
        self._banner(Operation.WITHDRAWAL)

        to = self.instance.address
        balance_before = self.get_balance(to)

        try:
            tx_hash = _to_hex(self.instance.wallet.withdraw(
                WithdrawTransaction(token=self.eth.l2_address, amount=amount, to=to)
            ))
        except Exception as e:
            logger.error(f"Withdrawal submission failed: {e}")
            raise OperationError(f"withdrawal failed, err: {e}") from e

        self._print(f"withdrawal succeed {tx_hash}")
        self._wait()

        balance_after = self.get_balance(to)
        self._print(
            f"before withdraw amount {balance_before}, after withdraw amount {balance_after}"
        )
        return OperationResult(
            operation=Operation.WITHDRAWAL,
            tx_hash=tx_hash,
            destination=to,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
        )

    def _wait(self) -> None:
        # Crude wait for inclusion; there is no confirmation polling
        logger.debug(f"Waiting {self.delay}s for the transaction to be included")
        self.sleep(self.delay)
