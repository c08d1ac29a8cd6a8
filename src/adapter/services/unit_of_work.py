from sqlalchemy.exc import DBAPIError, OperationalError
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

# PostgreSQL serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = {"40001", "40P01"}


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    def is_retryable(self, error: Exception) -> bool:
        if super().is_retryable(error):
            return True
        # SQLite reports "database is locked" as OperationalError
        if isinstance(error, OperationalError):
            return True
        if isinstance(error, DBAPIError):
            sqlstate = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
            return sqlstate in RETRYABLE_SQLSTATES
        return False
