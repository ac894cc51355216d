"""Pydantic schemas for trade and cash endpoints."""

from datetime import datetime
from typing import Optional
from decimal import Decimal

from pydantic import BaseModel, Field

from brokerage.api.schemas.transaction import TransactionOut


class TradeRequest(BaseModel):
    """Request schema for a buy or sell."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Ticker symbol (case-insensitive)")
    shares: Decimal = Field(..., gt=0, description="Number of shares")
    price: Decimal = Field(..., gt=0, description="Execution price per share")


class CashRequest(BaseModel):
    """Request schema for a deposit or withdrawal."""

    amount: Decimal = Field(..., gt=0, description="Cash amount")


class BuyResponse(BaseModel):
    """Response schema for an accepted buy."""

    success: bool = True
    transaction: TransactionOut
    total_cost: float
    new_balance: float
    new_buying_power: float


class SellResponse(BaseModel):
    """Response schema for an accepted sell."""

    success: bool = True
    transaction: TransactionOut
    proceeds: float
    cost_basis: float
    profit_loss: float
    profit_loss_percent: float
    remaining_shares: float
    new_balance: float
    new_buying_power: float


class CashResponse(BaseModel):
    """Response schema for an accepted deposit or withdrawal."""

    success: bool = True
    transaction: TransactionOut
    previous_balance: float
    new_balance: float
    new_buying_power: float


class WalletResponse(BaseModel):
    """Response schema for the wallet."""

    balance: float
    buying_power: float
    updated_at: Optional[datetime] = None
