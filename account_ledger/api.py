"""
FastAPI REST API Module

Exposes the ledger core over HTTP: deposits, withdrawals, balances and
transaction history per account, plus an admin listing of all transactions.
"""

from typing import List, Optional
from fastapi import FastAPI, APIRouter, HTTPException, Depends, Path, Request, Response, status
from fastapi.exceptions import RequestValidationError
import uvicorn

from . import __version__
from .config import LedgerConfig, get_config
from .ledger import LedgerCore, InvalidAmountError, InsufficientFundsError
from .logging_config import get_logger, setup_logging
from .schemas import TransactionRequest, TransactionModel, AccountBalanceModel, ErrorResponse


logger = get_logger("ledger.api")

router = APIRouter()


# Dependency to get the ledger owned by the running app
def get_ledger(request: Request) -> LedgerCore:
    return request.app.state.ledger


def account_id_path(
    account_id: str = Path(..., description="Account ID", examples=["acc1234567"])
) -> str:
    """Require account IDs of the configured fixed length"""
    length = get_config().account_id_length
    if len(account_id) != length:
        raise RequestValidationError([{
            "type": "account_id_length",
            "loc": ("path", "account_id"),
            "msg": f"Account ID must be exactly {length} characters",
            "input": account_id,
            "ctx": {"length": length}
        }])
    return account_id


def _transaction_location(request: Request, account_id: str, transaction_id: str) -> str:
    return f"{request.app.state.api_prefix}/{account_id}/transactions/{transaction_id}"


@router.post(
    "/{account_id}/deposits",
    status_code=status.HTTP_201_CREATED,
    response_model=TransactionModel,
    summary="Create a deposit",
    responses={400: {"model": ErrorResponse, "description": "Invalid deposit amount"}}
)
async def create_deposit(
    request_body: TransactionRequest,
    request: Request,
    response: Response,
    account_id: str = Depends(account_id_path),
    ledger: LedgerCore = Depends(get_ledger)
):
    """Add money to a specific account"""
    logger.info(f"Creating deposit for account {account_id}")
    try:
        transaction = ledger.deposit(account_id, request_body.amount, request_body.description)
    except InvalidAmountError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response.headers["Location"] = _transaction_location(request, account_id, transaction.id)
    return TransactionModel.from_transaction(transaction)


@router.post(
    "/{account_id}/withdrawals",
    status_code=status.HTTP_201_CREATED,
    response_model=TransactionModel,
    summary="Create a withdrawal",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid withdrawal amount"},
        409: {"model": ErrorResponse, "description": "Insufficient funds"}
    }
)
async def create_withdrawal(
    request_body: TransactionRequest,
    request: Request,
    response: Response,
    account_id: str = Depends(account_id_path),
    ledger: LedgerCore = Depends(get_ledger)
):
    """Withdraw money from a specific account"""
    logger.info(f"Creating withdrawal for account {account_id}")
    try:
        transaction = ledger.withdraw(account_id, request_body.amount, request_body.description)
    except InvalidAmountError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InsufficientFundsError as e:
        raise HTTPException(status_code=409, detail=str(e))

    response.headers["Location"] = _transaction_location(request, account_id, transaction.id)
    return TransactionModel.from_transaction(transaction)


@router.get("/transactions", response_model=List[TransactionModel],
            summary="Get all transactions")
async def get_all_transactions(ledger: LedgerCore = Depends(get_ledger)):
    """Retrieve all transactions across all accounts (admin)"""
    logger.debug("Retrieving all transactions")
    return [TransactionModel.from_transaction(t) for t in ledger.get_all_transactions()]


@router.get("/{account_id}/balance", response_model=AccountBalanceModel,
            summary="Get account balance")
async def get_account_balance(
    account_id: str = Depends(account_id_path),
    ledger: LedgerCore = Depends(get_ledger)
):
    """Retrieve current balance for an account"""
    logger.debug(f"Retrieving balance for account {account_id}")
    return AccountBalanceModel.from_balance(ledger.get_balance(account_id))


@router.get("/{account_id}/transactions", response_model=List[TransactionModel],
            summary="Get account transactions")
async def get_account_transactions(
    account_id: str = Depends(account_id_path),
    ledger: LedgerCore = Depends(get_ledger)
):
    """Retrieve transaction history for an account"""
    logger.debug(f"Retrieving transactions for account {account_id}")
    return [TransactionModel.from_transaction(t) for t in ledger.get_history(account_id)]


@router.get(
    "/{account_id}/transactions/{transaction_id}",
    response_model=TransactionModel,
    summary="Get a single transaction",
    responses={404: {"model": ErrorResponse, "description": "Transaction not found"}}
)
async def get_account_transaction(
    transaction_id: str,
    account_id: str = Depends(account_id_path),
    ledger: LedgerCore = Depends(get_ledger)
):
    transaction = ledger.get_transaction(account_id, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return TransactionModel.from_transaction(transaction)


def create_app(ledger: Optional[LedgerCore] = None,
               config: Optional[LedgerConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        ledger: Ledger instance to serve; a fresh one is created if omitted
        config: Configuration; the global configuration if omitted

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()

    app = FastAPI(
        title="Account Ledger API",
        description="REST API for account transactions and balances",
        version=__version__,
        docs_url="/docs" if config.enable_docs else None,
        redoc_url="/redoc" if config.enable_docs else None
    )

    app.state.ledger = ledger if ledger is not None else LedgerCore()
    app.state.api_prefix = config.api_prefix

    app.include_router(router, prefix=config.api_prefix, tags=["Account Ledger"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "account_ledger_api",
            "version": __version__,
            "transactions": app.state.ledger.transaction_count()
        }

    return app


app = create_app()


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    setup_logging(config.log_level, config.log_format)
    uvicorn.run(
        "account_ledger.api:app",
        host=host,
        port=port,
        reload=debug,
        log_level=config.log_level.lower()
    )
