"""Scoped transactions over an async SQLAlchemy session.

The catalog service asks a ``TransactionWrapper`` for a transaction at the
start of every mutation and commits or rolls it back before returning.
"""

from abc import ABC, abstractmethod

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


class TransactionHandle(ABC):
    """An open transaction that must be committed or rolled back."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit all pending changes."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all pending changes."""


class TransactionWrapper(ABC):
    """Source of scoped transactions."""

    @abstractmethod
    async def begin_transaction(self) -> TransactionHandle:
        """Open a transaction.

        Returns:
            Handle for the opened transaction.
        """


class SessionTransaction(TransactionHandle):
    """Transaction handle bound to an ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()


class SessionTransactionWrapper(TransactionWrapper):
    """Transaction wrapper for a request-scoped ``AsyncSession``.

    Example usage:
        async with async_session_factory() as session:
            wrapper = SessionTransactionWrapper(session)
            transaction = await wrapper.begin_transaction()
            try:
                ...
                await transaction.commit()
            except BaseException:
                await transaction.rollback()
                raise
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize wrapper with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def begin_transaction(self) -> TransactionHandle:
        # Reads earlier in the request may already have autobegun one.
        if not self.session.in_transaction():
            await self.session.begin()
        logger.debug("Transaction started")
        return SessionTransaction(self.session)
