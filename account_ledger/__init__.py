"""
Account Ledger

In-memory account ledger with an append-only transaction history,
derived balances and exact Decimal arithmetic.
"""

__version__ = "1.0.0"
