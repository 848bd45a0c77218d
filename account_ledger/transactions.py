"""
Transaction Records Module

Immutable deposit/withdrawal records and the append-only log that holds them.
The log is the permanent audit trail: records are never modified or removed.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum
import uuid


class TransactionType(Enum):
    """Kinds of ledger transactions"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass(frozen=True)
class Transaction:
    """
    Single admitted deposit or withdrawal.
    Frozen so a record cannot change after it enters the log.
    """
    account_id: str
    amount: Decimal
    transaction_type: TransactionType
    description: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise TypeError("Transaction amount must be a Decimal")
        if self.amount <= Decimal('0'):
            raise ValueError("Transaction amount must be positive")

    @property
    def signed_amount(self) -> Decimal:
        """Effect of this transaction on the account balance"""
        # copy_negate is exact; unary minus would round to context precision
        if self.transaction_type == TransactionType.WITHDRAWAL:
            return self.amount.copy_negate()
        return self.amount


class TransactionLog:
    """
    Append-only ordered sequence of transactions.

    Not synchronized on its own: the owning LedgerCore serializes access.
    Every read returns a fresh list so callers cannot reach internal state.
    """

    def __init__(self):
        self._transactions: List[Transaction] = []

    def append(self, transaction: Transaction) -> None:
        """Add a transaction at the end of the log"""
        self._transactions.append(transaction)

    def all(self) -> List[Transaction]:
        """All transactions in admission order"""
        return list(self._transactions)

    def filter_by_account(self, account_id: str) -> List[Transaction]:
        """Transactions for one account in admission order"""
        return [t for t in self._transactions if t.account_id == account_id]

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Look up a transaction by ID"""
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def __len__(self) -> int:
        return len(self._transactions)
