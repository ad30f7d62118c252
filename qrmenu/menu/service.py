from collections import defaultdict
from typing import List
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.menu.models import Category, Item
from qrmenu.menu.schemas import CategoryCreate, CategoryUpdate, ItemCreate, ItemUpdate
from qrmenu.shared.exceptions import NotFound, InvalidInput


def _item_order(item: Item):
    # Explicit positions first, then unpositioned items oldest first
    return (item.position is None, item.position or 0, item.created_at)


class MenuService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_category(self, business_id: UUID, category_id: UUID) -> Category:
        result = await self.db.execute(
            select(Category).where(
                Category.id == category_id,
                Category.business_id == business_id,
            )
        )
        category = result.scalar_one_or_none()
        if not category:
            raise NotFound("Category not found")
        return category

    async def _get_item(self, business_id: UUID, item_id: UUID) -> Item:
        result = await self.db.execute(
            select(Item)
            .join(Category, Item.category_id == Category.id)
            .where(Item.id == item_id, Category.business_id == business_id)
        )
        item = result.scalar_one_or_none()
        if not item:
            raise NotFound("Item not found")
        return item

    async def list_categories(self, business_id: UUID, available_only: bool = False) -> List[dict]:
        """Categories ordered by position, each with its items in display order."""
        query = select(Category).where(Category.business_id == business_id)
        if available_only:
            query = query.where(Category.available == True)
        result = await self.db.execute(query.order_by(Category.position, Category.created_at))
        categories = result.scalars().all()
        if not categories:
            return []

        item_query = select(Item).where(Item.category_id.in_([c.id for c in categories]))
        if available_only:
            item_query = item_query.where(Item.available == True)
        item_result = await self.db.execute(item_query)

        by_category = defaultdict(list)
        for item in item_result.scalars().all():
            by_category[item.category_id].append(item)

        return [
            {**c.__dict__, "items": sorted(by_category[c.id], key=_item_order)}
            for c in categories
        ]

    async def create_category(self, business_id: UUID, category_in: CategoryCreate) -> Category:
        if not category_in.name.strip():
            raise InvalidInput("Category name is required")
        category = Category(**category_in.model_dump(), business_id=business_id)
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def update_category(
        self, business_id: UUID, category_id: UUID, category_in: CategoryUpdate
    ) -> Category:
        category = await self._get_category(business_id, category_id)

        update_data = category_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field != "image_url":
                raise InvalidInput(f"{field} cannot be empty")
            if field == "name" and not value.strip():
                raise InvalidInput("Category name is required")
            setattr(category, field, value)

        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def delete_category(self, business_id: UUID, category_id: UUID) -> None:
        category = await self._get_category(business_id, category_id)
        await self.db.execute(delete(Item).where(Item.category_id == category.id))
        await self.db.delete(category)
        await self.db.commit()

    async def create_item(self, business_id: UUID, item_in: ItemCreate) -> Item:
        category = await self._get_category(business_id, item_in.category_id)
        if not item_in.name.strip():
            raise InvalidInput("Item name is required")
        item = Item(**item_in.model_dump(exclude={"category_id"}), category_id=category.id)
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def update_item(self, business_id: UUID, item_id: UUID, item_in: ItemUpdate) -> Item:
        item = await self._get_item(business_id, item_id)

        update_data = item_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if value is None and field in ("name", "available"):
                raise InvalidInput(f"{field} cannot be empty")
            if field == "name" and not value.strip():
                raise InvalidInput("Item name is required")
            setattr(item, field, value)

        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def delete_item(self, business_id: UUID, item_id: UUID) -> None:
        item = await self._get_item(business_id, item_id)
        await self.db.delete(item)
        await self.db.commit()
