"""SQLAlchemy implementation of PositionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_storage, from_storage
from brokerage.domain.models import Position
from brokerage.repositories.sqlalchemy.orm_models import PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed position repository. Writes are flushed, never committed."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, symbol: str) -> Optional[Position]:
        """Get the position for a symbol."""
        orm_pos = self._db.get(PositionORM, symbol)
        return self._to_domain(orm_pos) if orm_pos else None

    def list_all(self) -> list[Position]:
        """List all open positions ordered by symbol."""
        orm_positions = self._db.query(PositionORM).order_by(PositionORM.symbol).all()
        return [self._to_domain(p) for p in orm_positions]

    def save(self, position: Position) -> Position:
        """Insert or update a position."""
        orm_pos = self._db.get(PositionORM, position.symbol)

        if orm_pos:
            orm_pos.shares = position.shares
            orm_pos.avg_cost = position.avg_cost
            orm_pos.updated_at = to_storage(position.updated_at)
        else:
            orm_pos = PositionORM(
                symbol=position.symbol,
                shares=position.shares,
                avg_cost=position.avg_cost,
                created_at=to_storage(position.created_at or position.updated_at),
                updated_at=to_storage(position.updated_at),
            )
            self._db.add(orm_pos)

        self._db.flush()
        return self._to_domain(orm_pos)

    def delete(self, symbol: str) -> None:
        """Delete the position for a symbol (version-checked)."""
        orm_pos = self._db.get(PositionORM, symbol)
        if orm_pos is not None:
            self._db.delete(orm_pos)
            self._db.flush()

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM model to domain model."""
        return Position(
            symbol=orm.symbol,
            shares=Decimal(str(orm.shares)),
            avg_cost=Decimal(str(orm.avg_cost)),
            created_at=from_storage(orm.created_at) if orm.created_at else None,
            updated_at=from_storage(orm.updated_at) if orm.updated_at else None,
        )
