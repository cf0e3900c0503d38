"""DB service layer for gig performance use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries.
- Each write marks its settlement step inside the same transaction, so a
  step is either persisted and flagged, or neither.
- Store failures are raised as PersistenceError.
"""

from dataclasses import dataclass
from typing import List
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.crud import CreateData, ReadData, UpdateData
from src.errors import DuplicateSettlementError, PersistenceError
from src.models.schema_models import (
    ActivityLogSchema,
    GigSchema,
    ProfileSchema,
    SettlementSchema,
)


class SqlGigRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def read_gig_with_venue(self, gig_id: UUID) -> GigSchema | None:
        try:
            async with self.session_factory() as session:
                return await ReadData.read_gig_data(gig_id, session)
        except (SQLAlchemyError, ValidationError) as e:
            raise PersistenceError(f"Failed to read gig {gig_id}: {e}") from e

    async def complete_gig(
        self, gig_id: UUID, attendance: int, fan_gain: int, settlement_id: UUID | None = None
    ) -> bool:
        """Move the gig to completed.

        Returns:
            bool: False if the gig was already completed; the gig is left as is
            and the settlement, if any, is closed as abandoned
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    completed = await UpdateData.complete_gig_no_commit(gig_id, attendance, fan_gain, session)
                    if settlement_id is not None:
                        if completed:
                            await UpdateData.mark_settlement_step_no_commit(settlement_id, "gig_done", session)
                        else:
                            await UpdateData.abandon_settlement_no_commit(settlement_id, session)
                    return completed
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to complete gig {gig_id}: {e}") from e


class SqlProfileRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def read_profile(self, profile_id: UUID) -> ProfileSchema | None:
        try:
            async with self.session_factory() as session:
                return await ReadData.read_profile_data(profile_id, session)
        except (SQLAlchemyError, ValidationError) as e:
            raise PersistenceError(f"Failed to read profile {profile_id}: {e}") from e

    async def increment_by(
        self,
        profile_id: UUID,
        *,
        cash: int,
        experience: int,
        fame: int,
        settlement_id: UUID | None = None,
    ) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    found = await UpdateData.increment_profile_no_commit(
                        profile_id, cash, experience, fame, session
                    )
                    if not found:
                        raise PersistenceError(f"Profile {profile_id} not found")
                    if settlement_id is not None:
                        await UpdateData.mark_settlement_step_no_commit(settlement_id, "profile_done", session)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to credit profile {profile_id}: {e}") from e


class SqlActivityLogRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def append(self, entry: ActivityLogSchema, settlement_id: UUID | None = None) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await CreateData.add_activity_data(entry, session)
                    if settlement_id is not None:
                        await UpdateData.mark_settlement_step_no_commit(settlement_id, "activity_done", session)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to append activity for profile {entry.profile_id}: {e}") from e


class SqlSettlementRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def open(self, settlement: SettlementSchema) -> None:
        """Record a settlement before any of its writes.

        Raises:
            DuplicateSettlementError: A settlement already exists for the gig
            PersistenceError: The record could not be written
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await CreateData.add_settlement_data(settlement, session)
        except IntegrityError as e:
            raise DuplicateSettlementError(f"Gig {settlement.gig_id} already has a settlement") from e
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to open settlement for gig {settlement.gig_id}: {e}") from e

    async def pending(self, limit: int = 100) -> List[SettlementSchema]:
        try:
            async with self.session_factory() as session:
                return await ReadData.read_pending_settlements(limit, session)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read pending settlements: {e}") from e


@dataclass
class Repositories:
    gigs: SqlGigRepository
    profiles: SqlProfileRepository
    activity: SqlActivityLogRepository
    settlements: SqlSettlementRepository


def build_repositories(session_factory: async_sessionmaker[AsyncSession] | None = None) -> Repositories:
    if session_factory is None:
        from src.db import Session

        session_factory = Session
    return Repositories(
        gigs=SqlGigRepository(session_factory),
        profiles=SqlProfileRepository(session_factory),
        activity=SqlActivityLogRepository(session_factory),
        settlements=SqlSettlementRepository(session_factory),
    )
