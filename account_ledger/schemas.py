"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from .config import get_config
from .transactions import Transaction
from .balances import AccountBalance


class TransactionRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False,
                            description="Strictly positive decimal amount",
                            examples=["100.50"])
    description: str = Field(..., description="Transaction description",
                             examples=["Initial deposit"])

    @field_validator("description")
    @classmethod
    def check_description_length(cls, value: str) -> str:
        config = get_config()
        if not config.description_min_length <= len(value) <= config.description_max_length:
            raise ValueError(
                f"Description must be between {config.description_min_length} "
                f"and {config.description_max_length} characters"
            )
        return value


class TransactionModel(BaseModel):
    id: str
    account_id: str
    amount: Decimal
    transaction_type: str
    timestamp: datetime
    description: str

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> 'TransactionModel':
        return cls(
            id=transaction.id,
            account_id=transaction.account_id,
            amount=transaction.amount,
            transaction_type=transaction.transaction_type.value,
            timestamp=transaction.timestamp,
            description=transaction.description
        )


class AccountBalanceModel(BaseModel):
    account_id: str
    balance: Decimal

    @classmethod
    def from_balance(cls, balance: AccountBalance) -> 'AccountBalanceModel':
        return cls(account_id=balance.account_id, balance=balance.balance)


class ErrorResponse(BaseModel):
    detail: str
