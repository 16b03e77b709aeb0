"""Persistent store for cached search listings.

ListingStore is an explicitly constructed handle around an async session
factory. It is passed into the freshness cache, the search service and the
history service rather than living as module state, so tests can hand in a
store bound to an in-memory database or a mock.
"""

from datetime import datetime
from typing import List

import structlog
from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pricehub.core.exceptions import PersistenceError
from pricehub.models.listing import Listing
from pricehub.services.assembler import ListingRecord

logger = structlog.get_logger(__name__)

# Connection-level failures (refused, DNS) surface as OSError from the driver
_STORE_ERRORS = (SQLAlchemyError, OSError)

# Per-row failures: a duplicate seq, or a value the column cannot hold
_ROW_ERRORS = (IntegrityError, DataError)


class ListingStore:
    """Read/write access to the listings table, scoped by cache key."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """Initialize the store.

        Args:
            session_factory: Factory producing async sessions
        """
        self._session_factory = session_factory
        self.logger = logger.bind(service="listing_store")

    async def has_records_since(
        self, search_query: str, search_platforms: str, cutoff: datetime
    ) -> bool:
        """Whether any record in the scope was searched at or after ``cutoff``."""
        stmt = (
            select(Listing.id)
            .where(
                Listing.search_query == search_query,
                Listing.search_platforms == search_platforms,
                Listing.searched_at >= cutoff,
            )
            .limit(1)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return result.first() is not None
        except _STORE_ERRORS as e:
            raise PersistenceError(f"Failed to read listings: {e}") from e

    async def fetch_scope(self, search_query: str, search_platforms: str) -> List[ListingRecord]:
        """Return every record in the scope ordered by interleave id."""
        stmt = (
            select(Listing)
            .where(
                Listing.search_query == search_query,
                Listing.search_platforms == search_platforms,
            )
            .order_by(Listing.seq.asc())
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except _STORE_ERRORS as e:
            raise PersistenceError(f"Failed to read listings: {e}") from e

        return [self._to_record(row) for row in rows]

    async def replace_scope(
        self,
        search_query: str,
        search_platforms: str,
        records: List[ListingRecord],
    ) -> List[ListingRecord]:
        """Delete the scope, then insert ``records`` in its place.

        The delete and the inserts are separate transactions. If the batch
        insert hits a uniqueness violation or a value the column rejects,
        rows are retried one at a time and the failing ones are skipped;
        whatever was inserted is the new content of the scope.

        Returns:
            The records that were actually inserted

        Raises:
            PersistenceError: If the database is unavailable
        """
        log = self.logger.bind(query=search_query, platforms=search_platforms)

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(Listing).where(
                        Listing.search_query == search_query,
                        Listing.search_platforms == search_platforms,
                    )
                )
                await session.commit()
            log.info("scope_cleared", deleted=result.rowcount)

            if not records:
                return []

            async with self._session_factory() as session:
                session.add_all([self._to_row(r) for r in records])
                try:
                    await session.commit()
                    log.info("scope_rewritten", inserted=len(records))
                    return list(records)
                except _ROW_ERRORS:
                    await session.rollback()
                    log.warning("batch_insert_rejected", count=len(records))

                inserted = []
                for record in records:
                    session.add(self._to_row(record))
                    try:
                        await session.commit()
                    except _ROW_ERRORS as e:
                        await session.rollback()
                        log.warning("listing_insert_skipped", seq=record.id, error=str(e.orig))
                        continue
                    inserted.append(record)

            log.info(
                "scope_rewritten",
                inserted=len(inserted),
                skipped=len(records) - len(inserted),
            )
            return inserted

        except _STORE_ERRORS as e:
            log.error("scope_rewrite_failed", error=str(e))
            raise PersistenceError(f"Failed to store listings: {e}") from e

    async def recent_queries(self, limit: int = 4) -> List[str]:
        """Distinct search queries ordered by their latest search time."""
        latest = func.max(Listing.searched_at).label("latest")
        stmt = (
            select(Listing.search_query, latest)
            .group_by(Listing.search_query)
            .order_by(latest.desc())
            .limit(limit)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [row.search_query for row in result]
        except _STORE_ERRORS as e:
            raise PersistenceError(f"Failed to read search history: {e}") from e

    async def ping(self) -> bool:
        """Check database connectivity."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except _STORE_ERRORS as e:
            self.logger.error("store_ping_failed", error=str(e))
            return False

    @staticmethod
    def _to_row(record: ListingRecord) -> Listing:
        return Listing(
            seq=record.id,
            platform=record.platform,
            name=record.name,
            price=record.price,
            image_url=record.image,
            link=record.link,
            search_query=record.search_query,
            search_platforms=record.search_platforms,
            searched_at=record.searched_at,
        )

    @staticmethod
    def _to_record(row: Listing) -> ListingRecord:
        return ListingRecord(
            id=row.seq,
            platform=row.platform,
            name=row.name,
            price=row.price,
            image=row.image_url,
            link=row.link,
            search_query=row.search_query,
            search_platforms=row.search_platforms,
            searched_at=row.searched_at,
        )
