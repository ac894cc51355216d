"""Dependency injection for FastAPI."""

from fastapi import Request

from brokerage.app_context import AppContext
from brokerage.services import LedgerService, QueryService


def get_app_context(request: Request) -> AppContext:
    """Provide the AppContext opened by the application lifespan."""
    return request.app.state.context


def get_ledger_service(request: Request) -> LedgerService:
    """Provide the shared LedgerService instance."""
    return get_app_context(request).ledger_service


def get_query_service(request: Request) -> QueryService:
    """Provide the shared QueryService instance."""
    return get_app_context(request).query_service
