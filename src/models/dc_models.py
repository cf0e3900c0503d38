from pydantic import BaseModel
from enum import Enum
from uuid import UUID
from typing import List, Optional


class ShowTypeModel(str, Enum):
    standard = "standard"
    acoustic = "acoustic"


class ScoreBadgeModel(str, Enum):
    legendary = "Legendary"
    excellent = "Excellent"
    great = "Great"
    good = "Good"
    needs_work = "Needs Work"


class SimulationStateModel(str, Enum):
    idle = "idle"
    running = "running"
    finished = "finished"
    cancelled = "cancelled"


class StageDescriptorModel(BaseModel):
    name: str
    description: str
    duration: float  # in stage time units

    class Config:
        frozen = True


class StageRangeModel(BaseModel):
    """Inclusive sampling ranges for one show type's per-stage draws."""

    base_skill: tuple[float, float]
    crowd_bonus: tuple[float, float]
    stage_presence_roll: tuple[float, float]

    class Config:
        frozen = True


class ShowTypeModifierModel(BaseModel):
    payment: float
    fan_gain: float
    experience: float
    attendance: float

    class Config:
        frozen = True


class PerformanceMetricsModel(BaseModel):
    crowd_energy: float = 0.0
    technical_skill: float = 0.0
    stage_presence: float = 0.0
    overall_score: Optional[float] = None


class AttributeBonusesModel(BaseModel):
    stage_presence: float = 1.0
    crowd_engagement: float = 1.0
    social_reach: float = 1.0

    class Config:
        frozen = True


class RewardResultModel(BaseModel):
    earnings: int
    fan_gain: int
    experience_gain: int

    class Config:
        frozen = True


class RewardCalculationModel(BaseModel):
    performance_multiplier: float
    attendance: int
    base_payment: int
    success_ratio: float
    baseline_payment: float
    adjusted_payment: float
    payout_adjustment: float
    base_fan_gain: int
    baseline_fan_gain: float
    adjusted_fan_gain: float
    fan_adjustment: float
    reward: RewardResultModel

    class Config:
        frozen = True


class CommitReportModel(BaseModel):
    settlement_id: Optional[UUID] = None
    duplicate: bool = False
    gig_updated: bool = False
    profile_credited: bool = False
    activity_logged: bool = False

    @property
    def complete(self) -> bool:
        return self.gig_updated and self.profile_credited and self.activity_logged


class PerformRequestModel(BaseModel):
    profile_id: UUID


class PerformanceResultModel(BaseModel):
    gig_id: UUID
    venue_name: str
    show_type: ShowTypeModel
    stages: List[StageDescriptorModel]
    metrics: PerformanceMetricsModel
    overall_score: float
    badge: ScoreBadgeModel
    reward: RewardResultModel
    attendance: int
    commit: CommitReportModel
    player_level: int
    fame_title: str
