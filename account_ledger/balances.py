"""
Balance Index Module

Current balance per account, maintained alongside the transaction log.
Balance arithmetic never rounds: a sum that does not fit the balance
precision raises decimal.Inexact instead.
"""

from decimal import Decimal, Inexact, Overflow, localcontext
from dataclasses import dataclass
from typing import Dict


ZERO = Decimal('0')
BALANCE_PRECISION = 28  # Significant digits a balance may carry


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    """
    Add two decimals without rounding

    Raises:
        decimal.Inexact: If the exact sum needs more than BALANCE_PRECISION digits
        decimal.Overflow: If the sum exceeds the exponent range
    """
    with localcontext() as ctx:
        ctx.prec = BALANCE_PRECISION
        ctx.traps[Inexact] = True
        ctx.traps[Overflow] = True
        return a + b


@dataclass(frozen=True)
class AccountBalance:
    """Point-in-time balance of one account"""
    account_id: str
    balance: Decimal


class BalanceIndex:
    """
    Mapping of account ID to signed balance. Unknown accounts hold zero.

    adjust() must only be called from the LedgerCore critical section that
    also appends the matching transaction to the log.
    """

    def __init__(self):
        self._balances: Dict[str, Decimal] = {}

    def get(self, account_id: str) -> Decimal:
        """Stored balance, or zero if the account has no entry"""
        return self._balances.get(account_id, ZERO)

    def adjust(self, account_id: str, delta: Decimal) -> Decimal:
        """
        Add delta to the account balance and return the new balance

        The stored balance is left untouched if the exact sum does not fit
        (decimal.Inexact or decimal.Overflow is raised).
        """
        new_balance = exact_add(self._balances.get(account_id, ZERO), delta)
        self._balances[account_id] = new_balance
        return new_balance

    def snapshot(self) -> Dict[str, Decimal]:
        """Independent copy of all stored balances"""
        return dict(self._balances)
