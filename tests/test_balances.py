"""
Tests for the balance index and account balance values
"""

import dataclasses
import pytest
from decimal import Decimal, Inexact, Overflow

from account_ledger.balances import AccountBalance, BalanceIndex, exact_add


class TestBalanceIndex:
    """Test balance index behaviour"""

    def setup_method(self):
        """Set up test fixtures"""
        self.index = BalanceIndex()

    def test_unknown_account_is_zero(self):
        """Test that accounts without entries hold zero"""
        assert self.index.get("UNKNOWN001") == Decimal('0')

    def test_adjust_creates_entry(self):
        """Test that the first adjustment starts from zero"""
        new_balance = self.index.adjust("ACC0000001", Decimal('100.50'))

        assert new_balance == Decimal('100.50')
        assert self.index.get("ACC0000001") == Decimal('100.50')

    def test_adjust_accumulates_exactly(self):
        """Test that repeated adjustments keep exact decimal arithmetic"""
        for _ in range(10):
            self.index.adjust("ACC0000001", Decimal('0.10'))
        self.index.adjust("ACC0000001", Decimal('-0.30'))

        assert self.index.get("ACC0000001") == Decimal('0.70')

    def test_accounts_are_independent(self):
        """Test that adjusting one account leaves others untouched"""
        self.index.adjust("ACCOUNT__X", Decimal('10'))
        self.index.adjust("ACCOUNT__Y", Decimal('20'))

        assert self.index.get("ACCOUNT__X") == Decimal('10')
        assert self.index.get("ACCOUNT__Y") == Decimal('20')

    def test_snapshot_is_a_copy(self):
        """Test that the snapshot cannot be used to change balances"""
        self.index.adjust("ACC0000001", Decimal('5'))

        snapshot = self.index.snapshot()
        snapshot["ACC0000001"] = Decimal('1000')

        assert self.index.get("ACC0000001") == Decimal('5')

    def test_adjust_refuses_to_round(self):
        """Test that a sum needing more digits raises and keeps the balance"""
        self.index.adjust("ACC0000001", Decimal('1E+30'))

        with pytest.raises(Inexact):
            self.index.adjust("ACC0000001", Decimal('1'))

        assert self.index.get("ACC0000001") == Decimal('1E+30')


class TestExactAdd:
    """Test rounding-free balance arithmetic"""

    def test_full_precision_sum(self):
        """Test a 28-digit result is returned exactly"""
        assert exact_add(Decimal('9999999999999999999999999998'), Decimal('1')) == \
            Decimal('9999999999999999999999999999')

    def test_sum_beyond_precision_raises(self):
        """Test a 29-digit result is refused rather than rounded"""
        with pytest.raises(Inexact):
            exact_add(Decimal('9999999999999999999999999999'), Decimal('0.6'))

    def test_overflow_raises(self):
        """Test a sum beyond the exponent range is refused"""
        with pytest.raises(Overflow):
            exact_add(Decimal('9E+999999'), Decimal('9E+999999'))


class TestAccountBalance:
    """Test the account balance value type"""

    def test_structural_equality(self):
        """Test that balances with equal fields are equal"""
        assert AccountBalance("ACC0000001", Decimal('5.00')) == AccountBalance("ACC0000001", Decimal('5.00'))
        assert AccountBalance("ACC0000001", Decimal('5')) != AccountBalance("ACC0000002", Decimal('5'))

    def test_frozen(self):
        """Test that a balance value cannot be modified"""
        balance = AccountBalance("ACC0000001", Decimal('5'))

        with pytest.raises(dataclasses.FrozenInstanceError):
            balance.balance = Decimal('6')
