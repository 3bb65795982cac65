from __future__ import annotations
from typing import Optional, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quote_api.models.account import Account


class AccountRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_name(self, name: str) -> Optional[Account]:
        res = await self.session.execute(select(Account).where(Account.name == name))
        return res.scalars().first()

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(Account.id)))
        return int(res.scalar_one())

    async def search(self, q: str, *, limit: int = 20) -> List[Account]:
        q = q.strip()
        if not q:
            return []
        stmt = (
            select(Account)
            .where(Account.name.ilike(f"%{q}%"))
            .order_by(Account.name.asc())
            .limit(limit)
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())
