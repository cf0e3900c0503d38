from pydantic import BaseModel, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime


class VenueSchema(BaseModel):
    venue_id: UUID
    name: str
    location: Optional[str] = None
    capacity: int
    prestige_level: int

    class Config:
        from_attributes = True


class GigSchema(BaseModel):
    gig_id: UUID
    venue_id: UUID
    profile_id: UUID | None = None
    scheduled_at: datetime
    payment: int | None = None
    status: str
    show_type: str | None = None
    attendance: int | None = None
    fan_gain: int | None = None
    venue: Optional[VenueSchema] = None

    class Config:
        from_attributes = True


class ProfileSchema(BaseModel):
    profile_id: UUID
    user_id: UUID
    display_name: str
    cash: int
    experience: int
    fame: int
    performance_skill: float = 0.0
    charisma: float | None = None
    looks: float | None = None
    musicality: float | None = None

    @field_validator("cash", "experience", "fame", "performance_skill", mode="before")
    @classmethod
    def missing_counter_is_zero(cls, value):
        return 0 if value is None else value

    class Config:
        from_attributes = True


class ActivityLogSchema(BaseModel):
    activity_id: UUID
    user_id: UUID
    profile_id: UUID
    activity_type: str
    message: str
    earnings: int
    activity_metadata: dict
    created_at: datetime

    class Config:
        from_attributes = True


class SettlementSchema(BaseModel):
    settlement_id: UUID
    gig_id: UUID
    profile_id: UUID
    user_id: UUID
    venue_name: str
    overall_score: float
    attendance: int
    earnings: int
    fan_gain: int
    experience_gain: int
    gig_done: bool = False
    profile_done: bool = False
    activity_done: bool = False
    abandoned: bool = False
    created_at: datetime
    settled_at: datetime | None = None

    class Config:
        from_attributes = True

    @property
    def is_settled(self) -> bool:
        return self.gig_done and self.profile_done and self.activity_done
