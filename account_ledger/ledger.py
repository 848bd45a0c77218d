"""
Ledger Core

Admits deposits and withdrawals into the transaction log and keeps the
balance index in step with it. Every operation runs under one lock, so the
validate -> adjust -> append sequence is observed as a single step and
balance(A) always equals the net of A's recorded history.
"""

from decimal import Decimal, Inexact, InvalidOperation, Overflow
from typing import Dict, List, Optional, Any
import threading

from .transactions import Transaction, TransactionLog, TransactionType
from .balances import AccountBalance, BalanceIndex, ZERO, exact_add
from .logging_config import get_logger, log_action


class LedgerError(Exception):
    """Base class for ledger failures"""


class InvalidAmountError(LedgerError, ValueError):
    """Amount is not a strictly positive decimal"""

    def __init__(self, message: str, amount: Any = None):
        super().__init__(message)
        self.amount = amount


class InsufficientFundsError(LedgerError):
    """Withdrawal exceeds the current balance"""

    def __init__(self, account_id: str, requested: Decimal, available: Decimal):
        super().__init__("Insufficient funds")
        self.account_id = account_id
        self.requested = requested
        self.available = available


_OPERATION_LABELS = {
    TransactionType.DEPOSIT: "Deposit",
    TransactionType.WITHDRAWAL: "Withdrawal",
}


class LedgerCore:
    """
    Owner of the transaction log and balance index.

    Create one instance at the composition root and hand it to callers;
    it is safe to share between threads.
    """

    def __init__(self):
        self._log = TransactionLog()
        self._balances = BalanceIndex()
        self._lock = threading.Lock()
        self.logger = get_logger("ledger.core")

    def deposit(self, account_id: str, amount: Decimal, description: str) -> Transaction:
        """
        Deposit amount into an account

        Args:
            account_id: Account to credit (created implicitly)
            amount: Strictly positive amount
            description: Free-text description

        Returns:
            The admitted DEPOSIT transaction

        Raises:
            InvalidAmountError: If amount is not strictly positive
        """
        return self._admit(account_id, amount, description, TransactionType.DEPOSIT)

    def withdraw(self, account_id: str, amount: Decimal, description: str) -> Transaction:
        """
        Withdraw amount from an account

        Args:
            account_id: Account to debit
            amount: Strictly positive amount, no larger than the balance
            description: Free-text description

        Returns:
            The admitted WITHDRAWAL transaction

        Raises:
            InvalidAmountError: If amount is not strictly positive
            InsufficientFundsError: If the balance is lower than amount
        """
        return self._admit(account_id, amount, description, TransactionType.WITHDRAWAL)

    def get_balance(self, account_id: str) -> AccountBalance:
        """Current balance, zero for an account with no history"""
        with self._lock:
            balance = self._balances.get(account_id)
        self.logger.debug(f"Balance retrieved - Account: {account_id}, Balance: {balance}")
        return AccountBalance(account_id=account_id, balance=balance)

    def get_history(self, account_id: str) -> List[Transaction]:
        """Transactions for one account in admission order"""
        with self._lock:
            history = self._log.filter_by_account(account_id)
        self.logger.debug(f"Retrieved {len(history)} transactions for account {account_id}")
        return history

    def get_all_transactions(self) -> List[Transaction]:
        """Every admitted transaction across all accounts, in admission order"""
        with self._lock:
            transactions = self._log.all()
        self.logger.debug(f"Retrieved {len(transactions)} total transactions")
        return transactions

    def transaction_count(self) -> int:
        """Number of admitted transactions"""
        with self._lock:
            return len(self._log)

    def get_transaction(self, account_id: str, transaction_id: str) -> Optional[Transaction]:
        """Transaction by ID, or None if missing or owned by another account"""
        with self._lock:
            transaction = self._log.find(transaction_id)
        if transaction is None or transaction.account_id != account_id:
            return None
        return transaction

    def verify_integrity(self) -> bool:
        """
        Recompute every balance from the log and compare with the index

        Returns:
            True if all balances match their history and none is negative
        """
        with self._lock:
            expected: Dict[str, Optional[Decimal]] = {}
            for transaction in self._log.all():
                running = expected.get(transaction.account_id, ZERO)
                if running is None:
                    continue
                try:
                    expected[transaction.account_id] = exact_add(running, transaction.signed_amount)
                except (Inexact, Overflow):
                    # History whose net cannot be held exactly
                    expected[transaction.account_id] = None
            stored = self._balances.snapshot()

        consistent = True
        for account_id in set(expected) | set(stored):
            derived = expected.get(account_id, ZERO)
            recorded = stored.get(account_id, ZERO)
            if derived is None or derived != recorded or recorded < ZERO:
                consistent = False
                log_action(
                    self.logger, "error", "Ledger integrity violation",
                    action="verify_integrity", resource=f"account:{account_id}",
                    extra={"derived": str(derived), "recorded": str(recorded)}
                )
        return consistent

    def _admit(self, account_id: str, amount: Any, description: str,
               transaction_type: TransactionType) -> Transaction:
        label = _OPERATION_LABELS[transaction_type]
        amount = self._validate_amount(amount, label)

        with self._lock:
            if transaction_type == TransactionType.WITHDRAWAL:
                available = self._balances.get(account_id)
                if available < amount:
                    self.logger.warning(
                        f"Insufficient funds - Account: {account_id}, "
                        f"Requested: {amount}, Available: {available}"
                    )
                    raise InsufficientFundsError(account_id, amount, available)

            transaction = Transaction(
                account_id=account_id,
                amount=amount,
                transaction_type=transaction_type,
                description=description
            )
            try:
                new_balance = self._balances.adjust(account_id, transaction.signed_amount)
            except (Inexact, Overflow):
                self.logger.error(
                    f"{label} amount {amount} does not fit the balance of account {account_id}"
                )
                raise InvalidAmountError(f"{label} amount exceeds balance precision", amount)
            self._log.append(transaction)

        log_action(
            self.logger, "info",
            f"{label} successful - Account: {account_id}, Amount: {amount}, "
            f"New Balance: {new_balance}, Transaction ID: {transaction.id}",
            action=transaction_type.value, resource=f"account:{account_id}",
            extra={
                "transaction_id": transaction.id,
                "amount": str(amount),
                "new_balance": str(new_balance)
            }
        )
        return transaction

    def _validate_amount(self, amount: Any, label: str) -> Decimal:
        """Coerce to an exact Decimal and require it to be strictly positive"""
        # bool is an int subclass; float would not be exact
        if isinstance(amount, (bool, float)) or amount is None:
            self.logger.error(f"Invalid {label} amount {amount!r}")
            raise InvalidAmountError(f"{label} amount must be an exact decimal", amount)

        if not isinstance(amount, Decimal):
            try:
                amount = Decimal(str(amount))
            except InvalidOperation:
                self.logger.error(f"Invalid {label} amount {amount!r}")
                raise InvalidAmountError(f"{label} amount must be positive", amount)

        if not amount.is_finite() or amount <= ZERO:
            self.logger.error(f"Invalid {label} amount {amount}")
            raise InvalidAmountError(f"{label} amount must be positive", amount)

        return amount
