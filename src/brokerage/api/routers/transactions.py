"""Transaction history API."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage.api.deps import get_query_service
from brokerage.api.schemas import TransactionOut, TransactionListResponse
from brokerage.services import QueryService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    txn_type: Optional[str] = Query(None, alias="type", description="BUY, SELL, DEPOSIT, WITHDRAWAL or ALL"),
    limit: Optional[int] = Query(None, description="Maximum number of records"),
    start_date: Optional[str] = Query(None, description="Inclusive lower bound (ISO date or datetime)"),
    end_date: Optional[str] = Query(None, description="Inclusive upper bound; a bare date covers the whole day"),
    queries: QueryService = Depends(get_query_service),
):
    """List transactions newest first."""
    page = queries.get_transactions(
        txn_type=txn_type,
        limit=limit,
        start_date=start_date,
        end_date=end_date,
    )
    return TransactionListResponse(
        transactions=[TransactionOut.from_domain(t) for t in page.transactions],
        count=page.count,
    )


@router.get("/{txn_id}", response_model=TransactionOut)
def get_transaction(txn_id: str, queries: QueryService = Depends(get_query_service)):
    """Get a single transaction by id."""
    return TransactionOut.from_domain(queries.get_transaction(txn_id))
