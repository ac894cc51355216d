"""Wallet API: balance lookup, deposits and withdrawals."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_ledger_service
from brokerage.api.schemas import CashRequest, CashResponse, WalletResponse, TransactionOut
from brokerage.domain.views import CashResult
from brokerage.services import LedgerService

router = APIRouter(prefix="/wallet", tags=["wallet"])


def _cash_out(result: CashResult) -> CashResponse:
    return CashResponse(
        transaction=TransactionOut.from_domain(result.transaction),
        previous_balance=float(result.previous_balance),
        new_balance=float(result.new_balance),
        new_buying_power=float(result.new_buying_power),
    )


@router.get("", response_model=WalletResponse)
def get_wallet(ledger: LedgerService = Depends(get_ledger_service)):
    """Return the wallet, creating it with the seed balance on first access."""
    wallet = ledger.get_wallet()
    return WalletResponse(
        balance=float(wallet.balance),
        buying_power=float(wallet.buying_power),
        updated_at=wallet.updated_at,
    )


@router.post("/deposit", response_model=CashResponse, status_code=201)
def deposit(data: CashRequest, ledger: LedgerService = Depends(get_ledger_service)):
    """Deposit cash."""
    return _cash_out(ledger.execute_deposit(data.amount))


@router.post("/withdraw", response_model=CashResponse, status_code=201)
def withdraw(data: CashRequest, ledger: LedgerService = Depends(get_ledger_service)):
    """Withdraw cash; the balance may not go negative."""
    return _cash_out(ledger.execute_withdrawal(data.amount))
