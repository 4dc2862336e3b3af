from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from app.infrastructure.config.config import DB_CONFIG
from app.infrastructure.database.models import Base


class DatabaseConnection:
    def __init__(self, url: str | None = None):
        self._engine = create_async_engine(
            url=url or DB_CONFIG.get_url()
        )

    async def get_session(self) -> AsyncSession:
        return AsyncSession(bind=self._engine, expire_on_commit=False)

    async def create_tables(self) -> None:
        async with self._engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self._engine.dispose()
