from __future__ import annotations
from typing import Optional, List

from sqlalchemy import func, select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from quote_api.models.product import Product


class ProductRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_sku(
        self, sku: str, pricebook: Optional[str] = None
    ) -> Optional[Product]:
        stmt = select(Product).where(Product.sku == sku)
        if pricebook:
            stmt = stmt.where(Product.pricebook == pricebook)
        res = await self.session.execute(stmt.limit(1))
        return res.scalar_one_or_none()

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(Product.id)))
        return int(res.scalar_one())

    async def search(
        self,
        q: Optional[str] = None,
        *,
        pricebook: Optional[str] = None,
        limit: int = 25,
        offset: int = 0,
    ) -> List[Product]:
        stmt = select(Product)
        if pricebook:
            stmt = stmt.where(Product.pricebook == pricebook)
        if q:
            q = q.strip()
            if q:
                like = f"%{q}%"
                stmt = stmt.where(
                    or_(
                        Product.sku.ilike(like),
                        Product.name.ilike(like),
                    )
                )
        stmt = (
            stmt.order_by(Product.sku.asc(), Product.id.asc())
            .limit(limit)
            .offset(offset)
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())
