"""Runs a booked gig end to end: load, simulate, score, reward, commit."""

import logging
from datetime import datetime
from typing import Protocol
from uuid import UUID

from uuid6 import uuid7

from src.domain.game_balance import (
    attribute_bonuses_from_scores,
    calculate_level,
    get_fame_title,
)
from src.domain.performance_score import score_badge
from src.domain.reward_rules import calculate_reward
from src.domain.stage_rules import normalize_show_type, plan_stages
from src.errors import GigLoadError, GigStateError, PersistenceError
from src.load_secrets import stage_time_scale
from src.models.dc_models import PerformanceResultModel, StageDescriptorModel
from src.models.schema_models import GigSchema, ProfileSchema, SettlementSchema
from src.services.result_committer import ResultCommitter
from src.services.simulation import PerformanceSimulator, RandomSource


class GigReader(Protocol):
    async def read_gig_with_venue(self, gig_id: UUID) -> GigSchema | None: ...


class ProfileReader(Protocol):
    async def read_profile(self, profile_id: UUID) -> ProfileSchema | None: ...


class PerformanceService:
    def __init__(
        self,
        gig_reader: GigReader,
        profile_reader: ProfileReader,
        committer: ResultCommitter,
        random_source: RandomSource | None = None,
        time_scale: float = stage_time_scale,
    ):
        self.gig_reader = gig_reader
        self.profile_reader = profile_reader
        self.committer = committer
        self.random_source = random_source
        self.time_scale = time_scale

    async def load_gig(self, gig_id: UUID) -> GigSchema:
        try:
            gig = await self.gig_reader.read_gig_with_venue(gig_id)
        except PersistenceError as e:
            raise GigLoadError(f"Failed to load gig {gig_id}") from e
        if gig is None or gig.venue is None:
            raise GigLoadError(f"Gig {gig_id} not found")
        return gig

    async def load_profile(self, profile_id: UUID) -> ProfileSchema:
        try:
            profile = await self.profile_reader.read_profile(profile_id)
        except PersistenceError as e:
            raise GigLoadError(f"Failed to load profile {profile_id}") from e
        if profile is None:
            raise GigLoadError(f"Profile {profile_id} not found")
        return profile

    async def stage_plan(self, gig_id: UUID) -> list[StageDescriptorModel]:
        gig = await self.load_gig(gig_id)
        return plan_stages(gig.show_type)

    async def perform_gig(self, gig_id: UUID, profile_id: UUID) -> PerformanceResultModel:
        """Perform a scheduled gig and settle its rewards.

        The result is returned even when some of the writes failed; the
        commit report says which ones were persisted.

        Raises:
            GigLoadError: The gig, its venue or the profile could not be loaded
            GigStateError: The gig is already completed
        """
        gig = await self.load_gig(gig_id)
        profile = await self.load_profile(profile_id)
        if gig.status == "completed":
            raise GigStateError(f"Gig {gig_id} has already been performed")

        show_type = normalize_show_type(gig.show_type)
        stages = plan_stages(show_type)
        simulator = PerformanceSimulator(show_type, self.random_source, self.time_scale)
        metrics = await simulator.run(stages)
        overall_score = metrics.overall_score

        calculation = calculate_reward(
            overall_score=overall_score,
            venue_capacity=gig.venue.capacity,
            prestige_level=gig.venue.prestige_level,
            base_payment=gig.payment,
            show_type=show_type,
            performance_skill=profile.performance_skill or overall_score,
            fame=profile.fame,
            stage_presence=metrics.stage_presence,
            attribute_bonuses=attribute_bonuses_from_scores(profile.charisma, profile.looks, profile.musicality),
        )
        reward = calculation.reward
        logging.info(
            f"Gig {gig_id} scored {overall_score:.1f}: earnings={reward.earnings} "
            f"fan_gain={reward.fan_gain} experience_gain={reward.experience_gain}"
        )

        settlement = SettlementSchema(
            settlement_id=uuid7(),
            gig_id=gig.gig_id,
            profile_id=profile.profile_id,
            user_id=profile.user_id,
            venue_name=gig.venue.name,
            overall_score=overall_score,
            attendance=calculation.attendance,
            earnings=reward.earnings,
            fan_gain=reward.fan_gain,
            experience_gain=reward.experience_gain,
            created_at=datetime.now(),
        )
        report = await self.committer.commit(settlement)

        return PerformanceResultModel(
            gig_id=gig.gig_id,
            venue_name=gig.venue.name,
            show_type=show_type,
            stages=stages,
            metrics=metrics,
            overall_score=overall_score,
            badge=score_badge(overall_score),
            reward=reward,
            attendance=calculation.attendance,
            commit=report,
            player_level=calculate_level(profile.experience + reward.experience_gain),
            fame_title=get_fame_title(profile.fame + reward.fan_gain),
        )
