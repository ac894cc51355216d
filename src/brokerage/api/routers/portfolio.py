"""Portfolio API: valued summary and rebuild from the transaction log."""

from fastapi import APIRouter, Depends, Query

from brokerage.api.deps import get_ledger_service, get_query_service
from brokerage.api.schemas import (
    PositionOut,
    PerformanceOut,
    PortfolioSummaryResponse,
    RebuildResponse,
)
from brokerage.services import LedgerService, QueryService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioSummaryResponse)
def get_portfolio(
    include_positions: bool = Query(True, description="Include per-symbol holdings"),
    include_performance: bool = Query(True, description="Include figures derived from the transaction log"),
    queries: QueryService = Depends(get_query_service),
):
    """
    Return the portfolio summary.

    account_value = balance + Σ(shares × current price). Prices come from the
    configured price oracle.
    """
    summary = queries.get_portfolio_summary(
        include_positions=include_positions,
        include_performance=include_performance,
    )

    positions = None
    if summary.positions is not None:
        positions = [
            PositionOut(
                symbol=p.symbol,
                shares=float(p.shares),
                avg_cost=float(p.avg_cost),
                current_price=float(p.current_price),
                market_value=float(p.market_value),
                unrealized_pnl=float(p.unrealized_pnl),
                unrealized_pnl_percent=float(p.unrealized_pnl_percent),
            )
            for p in summary.positions
        ]

    performance = None
    if summary.performance is not None:
        perf = summary.performance
        performance = PerformanceOut(
            inception_date=perf.inception_date,
            total_deposits=float(perf.total_deposits),
            total_withdrawals=float(perf.total_withdrawals),
            net_contributions=float(perf.net_contributions),
            realized_pnl=float(perf.realized_pnl),
            total_return=float(perf.total_return),
            total_return_percent=float(perf.total_return_percent),
            total_trades=perf.total_trades,
            buy_trades=perf.buy_trades,
            sell_trades=perf.sell_trades,
        )

    return PortfolioSummaryResponse(
        account_value=float(summary.account_value),
        balance=float(summary.balance),
        buying_power=float(summary.buying_power),
        positions=positions,
        performance=performance,
        last_updated=summary.last_updated,
    )


@router.post("/rebuild", response_model=RebuildResponse)
def rebuild(ledger: LedgerService = Depends(get_ledger_service)):
    """Recompute wallet and positions by replaying the transaction log."""
    summary = ledger.rebuild_from_log()
    return RebuildResponse(
        transactions_replayed=summary.transactions_replayed,
        balance=float(summary.balance),
        positions=summary.positions,
        realized_pnl=float(summary.realized_pnl),
    )
