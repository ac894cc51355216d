"""SQLAlchemy implementation of WalletRepository."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_storage, from_storage
from brokerage.domain.models import Wallet
from brokerage.repositories.sqlalchemy.orm_models import WalletORM, WALLET_ROW_ID

logger = logging.getLogger(__name__)


class SqlAlchemyWalletRepository:
    """SQLAlchemy-backed wallet repository. Writes are flushed, never committed."""

    def __init__(self, db: Session):
        self._db = db

    def get(self) -> Optional[Wallet]:
        """Return the wallet, or None if it was never created."""
        orm_wallet = self._db.get(WalletORM, WALLET_ROW_ID)
        return self._to_domain(orm_wallet) if orm_wallet else None

    def get_or_create(self, seed_balance: Decimal, at: datetime) -> Wallet:
        """Return the wallet, creating it with the seed balance on first access."""
        orm_wallet = self._db.get(WalletORM, WALLET_ROW_ID)
        if orm_wallet is None:
            orm_wallet = WalletORM(
                id=WALLET_ROW_ID,
                balance=seed_balance,
                buying_power=seed_balance,
                updated_at=to_storage(at),
            )
            self._db.add(orm_wallet)
            self._db.flush()
            logger.info("Created wallet with seed balance %s", seed_balance)
        return self._to_domain(orm_wallet)

    def save(self, wallet: Wallet) -> Wallet:
        """Overwrite the wallet's balances."""
        orm_wallet = self._db.get(WalletORM, WALLET_ROW_ID)
        if orm_wallet is None:
            raise ValueError("Wallet not initialized")

        orm_wallet.balance = wallet.balance
        orm_wallet.buying_power = wallet.buying_power
        orm_wallet.updated_at = to_storage(wallet.updated_at)
        self._db.flush()
        return self._to_domain(orm_wallet)

    @staticmethod
    def _to_domain(orm: WalletORM) -> Wallet:
        """Convert ORM model to domain model."""
        return Wallet(
            balance=Decimal(str(orm.balance)),
            buying_power=Decimal(str(orm.buying_power)),
            updated_at=from_storage(orm.updated_at) if orm.updated_at else None,
        )
