from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class SqlAlchemyRepository(Generic[ModelType]):

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def add_item(self, item: ModelType) -> ModelType:
        self.session.add(item)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(item)
        return item

    async def get_item(self, item_id: UUID) -> ModelType | None:
        return await self.session.get(self.model, item_id)

    async def get_all_items(self) -> list[ModelType]:
        result = await self.session.execute(select(self.model))
        return list(result.scalars().all())

    async def update_item(self, item_id: UUID, **values: Any) -> int:
        result = await self.session.execute(
            update(self.model)
            .where(self.model.id == item_id)
            .values(**values)
        )
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount
