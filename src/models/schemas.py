from sqlalchemy.orm import DeclarativeBase, relationship
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, Boolean, DateTime, Float, Integer, String, Uuid
from uuid6 import uuid7
from datetime import datetime


class Base(DeclarativeBase):
    pass


class Venue(Base):
    __tablename__ = "venues"
    venue_id = Column(Uuid, primary_key=True, default=uuid7)
    name = Column(String)
    location = Column(String, nullable=True)
    capacity = Column(Integer, default=0)
    prestige_level = Column(Integer, default=0)

    gigs = relationship(
        "Gig",
        primaryjoin="Venue.venue_id == foreign(Gig.venue_id)",
        back_populates="venue",
    )


class Gig(Base):
    __tablename__ = "gigs"
    gig_id = Column(Uuid, primary_key=True, default=uuid7)
    venue_id = Column(Uuid)
    profile_id = Column(Uuid, nullable=True)
    scheduled_at = Column(DateTime, default=datetime.now)
    payment = Column(Integer, nullable=True)
    status = Column(String, default="scheduled")
    show_type = Column(String, nullable=True)
    attendance = Column(Integer, nullable=True)
    fan_gain = Column(Integer, nullable=True)

    venue = relationship(
        "Venue",
        primaryjoin="foreign(Gig.venue_id) == Venue.venue_id",
        back_populates="gigs",
        uselist=False,
    )


class Profile(Base):
    __tablename__ = "profiles"
    profile_id = Column(Uuid, primary_key=True, default=uuid7)
    user_id = Column(Uuid)
    display_name = Column(String)
    cash = Column(Integer, default=0, server_default="0")
    experience = Column(Integer, default=0, server_default="0")
    fame = Column(Integer, default=0, server_default="0")
    performance_skill = Column(Float, default=0.0, server_default="0")
    # Attribute scores on the 0-1000 scale.
    charisma = Column(Float, nullable=True)
    looks = Column(Float, nullable=True)
    musicality = Column(Float, nullable=True)


class ActivityFeed(Base):
    __tablename__ = "activity_feed"
    activity_id = Column(Uuid, primary_key=True, default=uuid7)
    user_id = Column(Uuid)
    profile_id = Column(Uuid)
    activity_type = Column(String)
    message = Column(String)
    earnings = Column(Integer, default=0)
    # "metadata" is reserved on declarative classes.
    activity_metadata = Column("metadata", JSON)
    created_at = Column(DateTime, default=datetime.now)


class Settlement(Base):
    __tablename__ = "gig_settlements"
    settlement_id = Column(Uuid, primary_key=True, default=uuid7)
    gig_id = Column(Uuid, unique=True)
    profile_id = Column(Uuid)
    user_id = Column(Uuid)
    venue_name = Column(String)
    overall_score = Column(Float)
    attendance = Column(Integer)
    earnings = Column(Integer)
    fan_gain = Column(Integer)
    experience_gain = Column(Integer)
    gig_done = Column(Boolean, default=False)
    profile_done = Column(Boolean, default=False)
    activity_done = Column(Boolean, default=False)
    # Closed without writes because the gig was already completed elsewhere.
    abandoned = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.now)
    settled_at = Column(DateTime, nullable=True)
