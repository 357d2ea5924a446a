"""Table suggestion engine"""

from dataclasses import dataclass, field
from datetime import datetime
from itertools import combinations
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import settings
from app.models.table import Table
from app.services.availability import AvailabilityChecker
from app.services.capacity import CapacityMonitor

logger = structlog.get_logger()


@dataclass
class TableCandidate:
    """One table, or a group of tables from the same area, that seats the party"""
    tables: List[Table] = field(default_factory=list)

    @property
    def total_capacity(self) -> int:
        return sum(table.capacity for table in self.tables)

    @property
    def location(self) -> Optional[str]:
        return self.tables[0].location if self.tables else None

    @property
    def is_combination(self) -> bool:
        return len(self.tables) > 1

    @property
    def table_ids(self) -> list:
        return [table.id for table in self.tables]

    def waste(self, guests: int) -> int:
        return self.total_capacity - guests


def _same_area(location: Optional[str], preferred_area: Optional[str]) -> bool:
    if not preferred_area or not location:
        return False
    return location.strip().lower() == preferred_area.strip().lower()


class TableSuggestionEngine:
    """Ranks tables, or same-area table groups, for a party at a given time"""

    def __init__(
        self,
        db: AsyncSession,
        availability: AvailabilityChecker,
        capacity: CapacityMonitor,
        max_combined_tables: int = None,
        combination_pool: int = None,
        max_suggestions: int = None,
    ):
        self.db = db
        self.availability = availability
        self.capacity = capacity
        self.max_combined_tables = max_combined_tables or settings.reservation_max_combined_tables
        self.combination_pool = combination_pool or settings.reservation_combination_pool
        self.max_suggestions = max_suggestions or settings.reservation_max_suggestions

    async def free_tables(self, at: datetime) -> List[Table]:
        """Active tables not held by any reservation near ``at``"""
        result = await self.db.execute(
            select(Table).where(Table.is_active.is_(True)).order_by(Table.table_number)
        )
        tables = list(result.scalars().all())
        if not tables:
            return []
        busy = await self.availability.busy_table_ids(at, table_ids=[t.id for t in tables])
        return [table for table in tables if table.id not in busy]

    async def suggest(
        self,
        number_of_guests: int,
        at: datetime,
        preferred_area: Optional[str] = None,
    ) -> List[TableCandidate]:
        """Ranked candidates, best first. Empty when nothing qualifies."""
        if await self.capacity.would_exceed(at, number_of_guests):
            logger.info(
                "Suggestion skipped, capacity threshold reached",
                guests=number_of_guests,
                reservation_time=at.isoformat(),
            )
            return []

        tables = await self.free_tables(at)

        singles = self.rank_single_tables(tables, number_of_guests, preferred_area)
        if singles:
            return singles[: self.max_suggestions]

        return self.rank_combinations(tables, number_of_guests, preferred_area)[: self.max_suggestions]

    def rank_single_tables(
        self,
        tables: List[Table],
        number_of_guests: int,
        preferred_area: Optional[str] = None,
    ) -> List[TableCandidate]:
        fitting = [table for table in tables if table.capacity >= number_of_guests]
        fitting.sort(
            key=lambda table: (
                not _same_area(table.location, preferred_area),
                table.capacity - number_of_guests,
                table.table_number,
            )
        )
        return [TableCandidate(tables=[table]) for table in fitting]

    def rank_combinations(
        self,
        tables: List[Table],
        number_of_guests: int,
        preferred_area: Optional[str] = None,
    ) -> List[TableCandidate]:
        """Groups of 2..max_combined_tables tables from one area.

        Tables that share an area are treated as pushable together. Within an
        area the largest tables form the search pool, and groups are ranked by
        area preference, table count, wasted seats, then how far apart the
        table numbers are.
        """
        by_area: Dict[str, List[Table]] = {}
        for table in tables:
            key = (table.location or "").strip().lower()
            by_area.setdefault(key, []).append(table)

        ranked = []
        for area_tables in by_area.values():
            pool = sorted(area_tables, key=lambda t: (-t.capacity, t.table_number))[: self.combination_pool]
            if sum(t.capacity for t in pool) < number_of_guests:
                continue
            for size in range(2, min(self.max_combined_tables, len(pool)) + 1):
                for group in combinations(pool, size):
                    seats = sum(t.capacity for t in group)
                    if seats < number_of_guests:
                        continue
                    numbers = [t.table_number for t in group]
                    key = (
                        not _same_area(group[0].location, preferred_area),
                        size,
                        seats - number_of_guests,
                        max(numbers) - min(numbers),
                        sorted(numbers),
                    )
                    ranked.append((key, sorted(group, key=lambda t: t.table_number)))

        ranked.sort(key=lambda item: item[0])
        return [TableCandidate(tables=list(group)) for _, group in ranked]
