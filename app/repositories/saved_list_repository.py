"""Repository for saved customer list data access."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.filters.saved_list import SavedListFilter
from app.models.saved_list import SavedList
from app.schemas.saved_list import SavedListCreate, SavedListUpdate


class SavedListRepository:
    """Data access layer for saved lists. Every query is scoped to one shop."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(
        self,
        shop: str,
        filters: SavedListFilter,
        page: int = 1,
        size: int = 50,
    ) -> tuple[list[SavedList], int]:
        query = filters.filter(select(SavedList).where(SavedList.shop == shop))
        count_query = filters.filter(
            select(func.count()).select_from(SavedList).where(SavedList.shop == shop)
        )

        total = (await self.session.execute(count_query)).scalar() or 0

        if filters.order_by:
            query = filters.sort(query)
        else:
            query = query.order_by(SavedList.created_at.desc())
        query = query.offset((page - 1) * size).limit(size)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def get_by_id(self, shop: str, list_id: str) -> SavedList | None:
        result = await self.session.execute(
            select(SavedList).where(SavedList.id == list_id, SavedList.shop == shop)
        )
        return result.scalar_one_or_none()

    async def create(self, shop: str, data: SavedListCreate) -> SavedList:
        saved = SavedList(
            shop=shop,
            list_name=data.list_name,
            query_data=data.filters.model_dump(mode="json", by_alias=True, exclude_none=True),
            customer_ids=data.customer_ids,
            source=data.source.value,
        )
        self.session.add(saved)
        await self.session.flush()
        await self.session.refresh(saved)
        return saved

    async def update(self, shop: str, list_id: str, data: SavedListUpdate) -> SavedList | None:
        saved = await self.get_by_id(shop, list_id)
        if not saved:
            return None

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(saved, field, value)

        await self.session.flush()
        await self.session.refresh(saved)
        return saved

    async def delete(self, shop: str, list_id: str) -> bool:
        saved = await self.get_by_id(shop, list_id)
        if not saved:
            return False
        await self.session.delete(saved)
        await self.session.flush()
        return True
