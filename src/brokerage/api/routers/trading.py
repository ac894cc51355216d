"""Trading API: buy and sell at a caller-supplied price."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_ledger_service
from brokerage.api.schemas import TradeRequest, BuyResponse, SellResponse, TransactionOut
from brokerage.services import LedgerService

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("/buy", response_model=BuyResponse, status_code=201)
def buy(data: TradeRequest, ledger: LedgerService = Depends(get_ledger_service)):
    """Buy shares, paying shares x price from buying power."""
    result = ledger.execute_buy(data.symbol, data.shares, data.price)
    return BuyResponse(
        transaction=TransactionOut.from_domain(result.transaction),
        total_cost=float(result.total_cost),
        new_balance=float(result.new_balance),
        new_buying_power=float(result.new_buying_power),
    )


@router.post("/sell", response_model=SellResponse, status_code=201)
def sell(data: TradeRequest, ledger: LedgerService = Depends(get_ledger_service)):
    """Sell held shares and report the realized profit/loss."""
    result = ledger.execute_sell(data.symbol, data.shares, data.price)
    return SellResponse(
        transaction=TransactionOut.from_domain(result.transaction),
        proceeds=float(result.proceeds),
        cost_basis=float(result.cost_basis),
        profit_loss=float(result.profit_loss),
        profit_loss_percent=float(result.profit_loss_percent),
        remaining_shares=float(result.remaining_shares),
        new_balance=float(result.new_balance),
        new_buying_power=float(result.new_buying_power),
    )
