"""Copyman protocols."""

from copyman.protocols.transaction import (
    CustomerActivity,
    Invoice,
    InvoiceLine,
    ItemRequest,
    LineResult,
    RewardStatus,
    TransactionReceipt,
    TransactionRequest,
)

__all__ = [
    # Submission
    "ItemRequest",
    "TransactionRequest",
    # Results
    "LineResult",
    "TransactionReceipt",
    "RewardStatus",
    # Read side
    "Invoice",
    "InvoiceLine",
    "CustomerActivity",
]
