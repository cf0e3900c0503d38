"""Persists the rewards of a finished performance.

Rewards are computed first and persisted best-effort: every write is attempted
even when an earlier one failed, and failures are logged rather than raised.
A settlement record keyed by gig id is opened before the writes; each write
flags its step on that record, so resume() can retry only the missing steps.
"""

import logging
from datetime import datetime
from typing import List, Protocol
from uuid import UUID

from uuid6 import uuid7

from src.errors import DuplicateSettlementError, PersistenceError
from src.models.dc_models import CommitReportModel
from src.models.schema_models import ActivityLogSchema, SettlementSchema

ACTIVITY_TYPE = "gig_performed"


class GigRepository(Protocol):
    async def complete_gig(
        self, gig_id: UUID, attendance: int, fan_gain: int, settlement_id: UUID | None = None
    ) -> bool: ...


class ProfileRepository(Protocol):
    async def increment_by(
        self,
        profile_id: UUID,
        *,
        cash: int,
        experience: int,
        fame: int,
        settlement_id: UUID | None = None,
    ) -> None: ...


class ActivityLogRepository(Protocol):
    async def append(self, entry: ActivityLogSchema, settlement_id: UUID | None = None) -> None: ...


class SettlementRepository(Protocol):
    async def open(self, settlement: SettlementSchema) -> None: ...

    async def pending(self, limit: int = 100) -> List[SettlementSchema]: ...


def build_activity_entry(settlement: SettlementSchema) -> ActivityLogSchema:
    return ActivityLogSchema(
        activity_id=uuid7(),
        user_id=settlement.user_id,
        profile_id=settlement.profile_id,
        activity_type=ACTIVITY_TYPE,
        message=f"Performed at {settlement.venue_name} and earned ${settlement.earnings:,}",
        earnings=settlement.earnings,
        activity_metadata={
            "venue": settlement.venue_name,
            "score": round(settlement.overall_score),
            "fanGain": settlement.fan_gain,
        },
        created_at=datetime.now(),
    )


class ResultCommitter:
    def __init__(
        self,
        gigs: GigRepository,
        profiles: ProfileRepository,
        activity: ActivityLogRepository,
        settlements: SettlementRepository,
    ):
        self.gigs = gigs
        self.profiles = profiles
        self.activity = activity
        self.settlements = settlements

    async def commit(self, settlement: SettlementSchema) -> CommitReportModel:
        """Open the settlement and run every write step.

        Args:
            settlement (SettlementSchema): Rewards computed for one performance

        Returns:
            CommitReportModel: Which steps were persisted
        """
        report = CommitReportModel()
        try:
            await self.settlements.open(settlement)
            report.settlement_id = settlement.settlement_id
        except DuplicateSettlementError as e:
            logging.warning(f"Skipping duplicate settlement: {e}")
            report.duplicate = True
            return report
        except PersistenceError as e:
            logging.error(f"Settling gig {settlement.gig_id} without a settlement record: {e}")

        return await self._run_steps(settlement, report)

    async def resume(self, settlement: SettlementSchema) -> CommitReportModel:
        """Retry the steps of an open settlement that have not been persisted yet."""
        report = CommitReportModel(
            settlement_id=settlement.settlement_id,
            gig_updated=settlement.gig_done,
            profile_credited=settlement.profile_done,
            activity_logged=settlement.activity_done,
        )
        return await self._run_steps(settlement, report)

    async def _run_steps(self, settlement: SettlementSchema, report: CommitReportModel) -> CommitReportModel:
        settlement_id = report.settlement_id

        if not report.gig_updated:
            try:
                completed = await self.gigs.complete_gig(
                    settlement.gig_id, settlement.attendance, settlement.fan_gain, settlement_id
                )
            except PersistenceError as e:
                logging.error(f"Failed to update gig {settlement.gig_id}: {e}")
            else:
                if not completed:
                    logging.warning(f"Gig {settlement.gig_id} was already completed; closing settlement without crediting")
                    report.duplicate = True
                    return report
                report.gig_updated = True

        if not report.profile_credited:
            try:
                await self.profiles.increment_by(
                    settlement.profile_id,
                    cash=settlement.earnings,
                    experience=settlement.experience_gain,
                    fame=settlement.fan_gain,
                    settlement_id=settlement_id,
                )
                report.profile_credited = True
            except PersistenceError as e:
                logging.error(f"Failed to credit profile {settlement.profile_id}: {e}")

        if not report.activity_logged:
            try:
                await self.activity.append(build_activity_entry(settlement), settlement_id)
                report.activity_logged = True
            except PersistenceError as e:
                logging.error(f"Failed to log activity for gig {settlement.gig_id}: {e}")

        if report.complete:
            logging.info(f"Settled gig {settlement.gig_id}")
        return report


async def reconcile_pending_settlements(committer: ResultCommitter, limit: int = 100) -> int:
    """Resume every open settlement; return how many became fully settled."""
    try:
        pending = await committer.settlements.pending(limit)
    except PersistenceError as e:
        logging.error(f"Failed to read pending settlements: {e}")
        return 0

    settled = 0
    for settlement in pending:
        report = await committer.resume(settlement)
        if report.complete:
            settled += 1
    if pending:
        logging.info(f"Reconciled {settled}/{len(pending)} pending settlements")
    return settled
