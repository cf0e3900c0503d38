from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select, update
from sqlalchemy.orm import joinedload
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from typing import List
from uuid import UUID
import logging

from src.models.schema_models import (
    ActivityLogSchema,
    GigSchema,
    ProfileSchema,
    SettlementSchema,
    VenueSchema,
)
from src.models.schemas import (
    ActivityFeed,
    Gig,
    Profile,
    Settlement,
    Venue,
)

SETTLEMENT_STEPS = ("gig_done", "profile_done", "activity_done")


class ReadData:
    @staticmethod
    async def read_gig_data(gig_id: UUID, session: AsyncSession) -> GigSchema | None:
        """Read gig data with its venue

        Args:
            gig_id (UUID): To identify the gig

        Returns:
            GigSchema | None: Gig data with venue data, None if the gig does not exist
        """
        stmt = select(Gig).where(Gig.gig_id == gig_id).options(joinedload(Gig.venue))
        result = await session.execute(stmt)
        result = result.scalars().first()

        if result is None:
            return None
        return GigSchema.model_validate(result)

    @staticmethod
    async def read_profile_data(profile_id: UUID, session: AsyncSession) -> ProfileSchema | None:
        stmt = select(Profile).where(Profile.profile_id == profile_id)
        result = await session.execute(stmt)
        result = result.scalars().first()

        if result is None:
            return None
        return ProfileSchema.model_validate(result)

    @staticmethod
    async def read_pending_settlements(limit: int, session: AsyncSession) -> List[SettlementSchema]:
        """Read settlements which still have a step to persist, oldest first

        Args:
            limit (int): Maximum number of settlements to return
        """
        stmt = (
            select(Settlement)
            .where(Settlement.settled_at.is_(None))
            .order_by(Settlement.created_at)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [SettlementSchema.model_validate(row) for row in result.scalars().all()]


class CreateData:
    @staticmethod
    async def create_venue_data(venue: VenueSchema, session: AsyncSession) -> bool:
        async with session:
            try:
                new_venue = Venue(
                    venue_id=venue.venue_id,
                    name=venue.name,
                    location=venue.location,
                    capacity=venue.capacity,
                    prestige_level=venue.prestige_level,
                )
                session.add(new_venue)
                await session.commit()
                return True
            except SQLAlchemyError as e:
                logging.error(f"Failed to create venue data: {e}")
                await session.rollback()
                return False

    @staticmethod
    async def create_gig_data(gig: GigSchema, session: AsyncSession) -> bool:
        async with session:
            try:
                new_gig = Gig(
                    gig_id=gig.gig_id,
                    venue_id=gig.venue_id,
                    profile_id=gig.profile_id,
                    scheduled_at=gig.scheduled_at,
                    payment=gig.payment,
                    status=gig.status,
                    show_type=gig.show_type,
                    attendance=gig.attendance,
                    fan_gain=gig.fan_gain,
                )
                session.add(new_gig)
                await session.commit()
                return True
            except SQLAlchemyError as e:
                logging.error(f"Failed to create gig data: {e}")
                await session.rollback()
                return False

    @staticmethod
    async def create_profile_data(profile: ProfileSchema, session: AsyncSession) -> bool:
        async with session:
            try:
                new_profile = Profile(
                    profile_id=profile.profile_id,
                    user_id=profile.user_id,
                    display_name=profile.display_name,
                    cash=profile.cash,
                    experience=profile.experience,
                    fame=profile.fame,
                    performance_skill=profile.performance_skill,
                    charisma=profile.charisma,
                    looks=profile.looks,
                    musicality=profile.musicality,
                )
                session.add(new_profile)
                await session.commit()
                return True
            except SQLAlchemyError as e:
                logging.error(f"Failed to create profile data: {e}")
                await session.rollback()
                return False

    @staticmethod
    async def add_activity_data(activity: ActivityLogSchema, session: AsyncSession):
        """Add an activity feed row without committing

        Args:
            activity (ActivityLogSchema): Activity feed entry
        """
        session.add(
            ActivityFeed(
                activity_id=activity.activity_id,
                user_id=activity.user_id,
                profile_id=activity.profile_id,
                activity_type=activity.activity_type,
                message=activity.message,
                earnings=activity.earnings,
                activity_metadata=activity.activity_metadata,
                created_at=activity.created_at,
            )
        )

    @staticmethod
    async def add_settlement_data(settlement: SettlementSchema, session: AsyncSession):
        """Add a settlement row without committing

        Args:
            settlement (SettlementSchema): Computed rewards waiting to be persisted
        """
        session.add(
            Settlement(
                settlement_id=settlement.settlement_id,
                gig_id=settlement.gig_id,
                profile_id=settlement.profile_id,
                user_id=settlement.user_id,
                venue_name=settlement.venue_name,
                overall_score=settlement.overall_score,
                attendance=settlement.attendance,
                earnings=settlement.earnings,
                fan_gain=settlement.fan_gain,
                experience_gain=settlement.experience_gain,
                gig_done=settlement.gig_done,
                profile_done=settlement.profile_done,
                activity_done=settlement.activity_done,
                abandoned=settlement.abandoned,
                created_at=settlement.created_at,
                settled_at=settlement.settled_at,
            )
        )


class UpdateData:
    @staticmethod
    async def complete_gig_no_commit(
        gig_id: UUID, attendance: int, fan_gain: int, session: AsyncSession
    ) -> bool:
        """Mark a gig completed unless it already is

        Args:
            gig_id (UUID): To identify the gig
            attendance (int): Attendance of the performance
            fan_gain (int): Fans gained by the performance

        Returns:
            bool: True if this call moved the gig to completed
        """
        stmt = (
            update(Gig)
            .where(Gig.gig_id == gig_id, Gig.status != "completed")
            .values(status="completed", attendance=attendance, fan_gain=fan_gain)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    async def increment_profile_no_commit(
        profile_id: UUID, cash: int, experience: int, fame: int, session: AsyncSession
    ) -> bool:
        """Add to the profile counters in a single UPDATE statement

        Returns:
            bool: False if the profile does not exist
        """
        stmt = (
            update(Profile)
            .where(Profile.profile_id == profile_id)
            .values(
                cash=func.coalesce(Profile.cash, 0) + cash,
                experience=func.coalesce(Profile.experience, 0) + experience,
                fame=func.coalesce(Profile.fame, 0) + fame,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    async def mark_settlement_step_no_commit(settlement_id: UUID, step: str, session: AsyncSession):
        """Flag one settlement step as persisted; close the settlement once every step is

        Args:
            settlement_id (UUID): To identify the settlement
            step (str): One of SETTLEMENT_STEPS
        """
        if step not in SETTLEMENT_STEPS:
            raise ValueError(f"Unknown settlement step: {step}")

        stmt = select(Settlement).where(Settlement.settlement_id == settlement_id)
        result = await session.execute(stmt)
        row = result.scalars().first()
        if row is None:
            return

        setattr(row, step, True)
        if all(getattr(row, name) for name in SETTLEMENT_STEPS):
            row.settled_at = datetime.now()

    @staticmethod
    async def abandon_settlement_no_commit(settlement_id: UUID, session: AsyncSession):
        """Close a settlement whose gig was already completed, so it is never retried

        Args:
            settlement_id (UUID): To identify the settlement
        """
        stmt = (
            update(Settlement)
            .where(Settlement.settlement_id == settlement_id)
            .values(abandoned=True, settled_at=datetime.now())
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)
