from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quote_api.domain.legacy import upgrade_quote_document
from quote_api.models.quote import Quote
from quote_api.models.quote_record import QuoteRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QuoteRepository(Protocol):
    async def create(self, data: Dict[str, Any]) -> Quote: ...

    async def get_by_id(self, quote_id: str) -> Optional[Quote]: ...

    async def update(self, quote_id: str, updates: Dict[str, Any]) -> Optional[Quote]: ...

    async def delete(self, quote_id: str) -> bool: ...

    async def duplicate(self, quote_id: str, created_by: str) -> Optional[Quote]: ...

    async def list_all(self) -> List[Quote]: ...


class SqlQuoteRepository(QuoteRepository):
    """
    Quote store backed by SQLAlchemy. Each write replaces the whole quote
    document in a single transaction (last write wins).
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utc_now,
        max_insert_attempts: int = 5,
    ) -> None:
        self.session_maker = session_maker
        self.clock = clock
        self.max_insert_attempts = max_insert_attempts

    def _timestamp(self) -> str:
        return self.clock().isoformat()

    @staticmethod
    def _to_quote(record: QuoteRecord) -> Quote:
        return Quote.model_validate(upgrade_quote_document(record.document))

    async def _next_seq(self, session: AsyncSession) -> int:
        res = await session.execute(select(func.max(QuoteRecord.seq)))
        return (res.scalar_one_or_none() or 0) + 1

    async def _insert(self, session: AsyncSession, doc: Dict[str, Any]) -> Quote:
        # a concurrent insert can take the same seq; the unique constraint decides
        attempt = 0
        while True:
            attempt += 1
            seq = await self._next_seq(session)
            now = self._timestamp()
            quote = Quote.model_validate(
                {**doc, "id": f"quote-{seq}", "createdAt": now, "updatedAt": now}
            )
            session.add(
                QuoteRecord(
                    id=quote.id,
                    seq=seq,
                    updated_at=quote.updatedAt,
                    document=quote.model_dump(mode="json"),
                )
            )
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                if attempt >= self.max_insert_attempts:
                    raise
                logger.info(
                    "Quote id %s already taken (attempt %s/%s), retrying",
                    quote.id,
                    attempt,
                    self.max_insert_attempts,
                )
                continue
            return quote

    async def create(self, data: Dict[str, Any]) -> Quote:
        async with self.session_maker() as session:
            quote = await self._insert(session, data)
        logger.info("Quote created: %s", quote.id)
        return quote

    async def get_by_id(self, quote_id: str) -> Optional[Quote]:
        async with self.session_maker() as session:
            record = await session.get(QuoteRecord, quote_id)
            return self._to_quote(record) if record else None

    async def update(self, quote_id: str, updates: Dict[str, Any]) -> Optional[Quote]:
        async with self.session_maker() as session:
            record = await session.get(QuoteRecord, quote_id)
            if record is None:
                return None
            doc = upgrade_quote_document(record.document)
            doc.update(updates)
            doc["id"] = quote_id
            doc["updatedAt"] = self._timestamp()
            quote = Quote.model_validate(doc)

            record.document = quote.model_dump(mode="json")
            record.updated_at = quote.updatedAt
            await session.commit()
        logger.info("Quote updated: %s", quote_id)
        return quote

    async def delete(self, quote_id: str) -> bool:
        async with self.session_maker() as session:
            res = await session.execute(
                delete(QuoteRecord).where(QuoteRecord.id == quote_id)
            )
            await session.commit()
        deleted = (res.rowcount or 0) > 0
        if deleted:
            logger.info("Quote deleted: %s", quote_id)
        return deleted

    async def duplicate(self, quote_id: str, created_by: str) -> Optional[Quote]:
        async with self.session_maker() as session:
            record = await session.get(QuoteRecord, quote_id)
            if record is None:
                return None
            original = self._to_quote(record)
            session.expunge(record)
            doc = original.model_dump(mode="json")
            doc["dealName"] = f"{original.dealName} (Copy)"
            doc["createdBy"] = created_by
            quote = await self._insert(session, doc)
        logger.info("Quote %s duplicated as %s", quote_id, quote.id)
        return quote

    async def list_all(self) -> List[Quote]:
        async with self.session_maker() as session:
            res = await session.execute(
                select(QuoteRecord).order_by(
                    QuoteRecord.updated_at.desc(), QuoteRecord.seq.desc()
                )
            )
            return [self._to_quote(r) for r in res.scalars().all()]
