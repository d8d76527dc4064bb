"""SQLAlchemy-backed unit of work shared by the repositories of one request."""

from sqlalchemy.ext.asyncio import AsyncSession

from baraza.application.interfaces import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
