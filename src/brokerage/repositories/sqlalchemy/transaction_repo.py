"""SQLAlchemy implementation of TransactionRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy import and_

from brokerage.core.timezone import to_storage, from_storage
from brokerage.domain.models import Transaction, TransactionType
from brokerage.repositories.sqlalchemy.orm_models import TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction log. Rows are inserted, never updated."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, transaction: Transaction) -> Transaction:
        """Append a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def list_all(self) -> list[Transaction]:
        """List every transaction, oldest first; equal timestamps in insertion order."""
        query = self._db.query(TransactionORM).order_by(
            TransactionORM.timestamp, TransactionORM.seq
        )
        return [self._to_domain(t) for t in query.all()]

    def query(
        self,
        txn_type: Optional[TransactionType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """Query transactions with filters, newest first."""
        query = self._db.query(TransactionORM)

        conditions = []
        if txn_type:
            conditions.append(TransactionORM.txn_type == txn_type)
        if start_date:
            conditions.append(TransactionORM.timestamp >= to_storage(start_date))
        if end_date:
            conditions.append(TransactionORM.timestamp <= to_storage(end_date))

        if conditions:
            query = query.filter(and_(*conditions))

        query = query.order_by(TransactionORM.timestamp.desc(), TransactionORM.seq.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def _to_orm(self, txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            txn_id=txn.txn_id,
            txn_type=txn.txn_type,
            symbol=txn.symbol,
            shares=txn.shares,
            price=txn.price,
            amount=txn.amount,
            timestamp=to_storage(txn.timestamp),
            status=txn.status,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            txn_type=orm.txn_type,
            amount=Decimal(str(orm.amount)),
            timestamp=from_storage(orm.timestamp),
            symbol=orm.symbol,
            shares=Decimal(str(orm.shares)) if orm.shares is not None else None,
            price=Decimal(str(orm.price)) if orm.price is not None else None,
            status=orm.status,
        )
