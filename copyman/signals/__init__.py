"""
Copyman signals - public event API.

Emitted signals:
- transaction_committed: Emitted by TransactionService.process() after commit
- ledger_recomputed: Emitted by LedgerService.recompute()
"""

from django.dispatch import Signal

transaction_committed = Signal()  # sender=Transaction, transaction=Transaction, receipt=TransactionReceipt
ledger_recomputed = Signal()  # sender=RewardLedger, ledger=RewardLedger, previous=dict
