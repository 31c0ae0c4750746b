#!/usr/bin/env python3
"""Data models for the zkSync demo.

This module holds the operation selector, the fixed demo parameters and the
immutable records produced by a run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Recipient of the layer-2 transfer demo
TRANSFER_DESTINATION: str = "0x5Ed9a6713962f04DA057e6A949394e002855DF72"

DEPOSIT_AMOUNT: int = 1_000_000_000_000_000  # wei
TRANSFER_AMOUNT: int = 1_000_000_000_000_000  # wei
WITHDRAWAL_AMOUNT: int = 1_000_000_000_000  # wei

CONFIRMATION_DELAY: float = 5.0  # seconds


def _quantity(value: Any) -> int | None:
    """Parse a JSON-RPC quantity; zkSync-only receipt keys arrive as hex strings."""
    if isinstance(value, str):
        return int(value, 16)
    return value


class Operation(Enum):
    """The three demo operations; the value is the CLI name."""

    DEPOSIT = "deposit"
    TRANSFER = "transfer"
    WITHDRAWAL = "withdrawal"

    @property
    def default_amount(self) -> int:
        match self:
            case Operation.DEPOSIT:
                return DEPOSIT_AMOUNT
            case Operation.TRANSFER:
                return TRANSFER_AMOUNT
            case Operation.WITHDRAWAL:
                return WITHDRAWAL_AMOUNT

    @property
    def description(self) -> str:
        """One-line summary printed in the banner before the operation runs."""
        match self:
            case Operation.DEPOSIT:
                return "signer deposit l1 ether to l2, and the asset will be locked in contract of diamondProxy"
            case Operation.TRANSFER:
                return "signer transfer mirror asset `ether` on l2"
            case Operation.WITHDRAWAL:
                return "signer withdraw asset from l2 to l1"


@dataclass(frozen=True, slots=True)
class ReceiptSummary:
    """Location of a layer-2 transaction inside an L1 batch.

    Attributes:
        to: Recipient address of the transaction
        contract_address: Address of a deployed contract, if any
        l1_batch_number: L1 batch the transaction was included in
        l1_batch_tx_index: Position of the transaction within the batch
    """

    to: str | None
    contract_address: str | None
    l1_batch_number: int | None
    l1_batch_tx_index: int | None

    @classmethod
    def from_receipt(cls, receipt: Any) -> "ReceiptSummary":
        """Pick the batch fields out of a zkSync transaction receipt."""
        return cls(
            to=receipt.get("to"),
            contract_address=receipt.get("contractAddress"),
            l1_batch_number=_quantity(receipt.get("l1BatchNumber")),
            l1_batch_tx_index=_quantity(receipt.get("l1BatchTxIndex")),
        )

    def __str__(self) -> str:
        return (
            f"receipt.to {self.to}, dest contract address is {self.contract_address}, "
            f"L1BatchNumber {self.l1_batch_number}, "
            f"L1BatchTransactionIndex {self.l1_batch_tx_index}"
        )


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a single demo operation.

    Attributes:
        operation: Which operation ran
        tx_hash: Hash of the submitted transaction (0x-prefixed)
        destination: Address whose balance was tracked
        amount: Amount sent, in wei
        balance_before: Layer-2 balance before submission
        balance_after: Layer-2 balance after the confirmation delay
        receipt: Batch details, only fetched for transfers
    """

    operation: Operation
    tx_hash: str
    destination: str
    amount: int
    balance_before: int
    balance_after: int
    receipt: ReceiptSummary | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "operation": self.operation.value,
            "tx_hash": self.tx_hash,
            "destination": self.destination,
            "amount": self.amount,
            "balance_before": self.balance_before,
            "balance_after": self.balance_after,
            "receipt": None if self.receipt is None else {
                "to": self.receipt.to,
                "contract_address": self.receipt.contract_address,
                "l1_batch_number": self.receipt.l1_batch_number,
                "l1_batch_tx_index": self.receipt.l1_batch_tx_index,
            },
        }
