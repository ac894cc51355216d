"""Position repository protocol."""

from typing import Protocol, Optional

from brokerage.domain.models import Position


class PositionRepository(Protocol):
    """Interface for per-symbol position data access."""

    def get(self, symbol: str) -> Optional[Position]:
        """Get the position for a symbol."""
        ...

    def list_all(self) -> list[Position]:
        """List all open positions ordered by symbol."""
        ...

    def save(self, position: Position) -> Position:
        """Insert or update a position."""
        ...

    def delete(self, symbol: str) -> None:
        """Delete the position for a symbol."""
        ...
