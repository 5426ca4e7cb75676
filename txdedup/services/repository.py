"""Transaction repository backed by PostgreSQL."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from txdedup.models.transaction import Transaction

logger = logging.getLogger(__name__)


class DuplicateDetectionError(Exception):
    """Base exception for duplicate detection errors."""

    pass


class RepositoryError(DuplicateDetectionError):
    """Loading stored transactions failed."""

    def __init__(self, message: str, wallet_id: int | None = None):
        super().__init__(message)
        self.wallet_id = wallet_id


class SqlTransactionRepository:
    """Reads stored transactions for duplicate detection."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_wallet_and_date_range(
        self,
        wallet_id: int,
        start_date: datetime,
        end_date: datetime,
    ) -> list[Transaction]:
        """Get a wallet's non-deleted transactions within a date range.

        Both ends of the range are inclusive. Uses the (wallet_id, date, amount)
        index.

        Raises:
            RepositoryError: If the query fails
        """
        query = (
            select(Transaction)
            .where(
                Transaction.wallet_id == wallet_id,
                Transaction.date >= start_date,
                Transaction.date <= end_date,
                Transaction.deleted_at.is_(None),
            )
            .order_by(Transaction.date, Transaction.id)
        )

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load transactions for wallet {wallet_id}: {e}")
            raise RepositoryError(
                "failed to find transactions by date range", wallet_id=wallet_id
            ) from e

        return list(result.scalars().all())
