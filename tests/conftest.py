from datetime import datetime
from uuid import uuid4

import pytest

from src.models.schema_models import GigSchema, ProfileSchema, SettlementSchema, VenueSchema
from src.services.result_committer import ResultCommitter
from tests.fakes import (
    FakeActivityLogRepository,
    FakeGigRepository,
    FakeProfileRepository,
    FakeSettlementRepository,
    FakeStore,
)


@pytest.fixture
def venue() -> VenueSchema:
    return VenueSchema(venue_id=uuid4(), name="The Roxy", location="Los Angeles", capacity=1000, prestige_level=3)


@pytest.fixture
def gig(venue) -> GigSchema:
    return GigSchema(
        gig_id=uuid4(),
        venue_id=venue.venue_id,
        scheduled_at=datetime(2026, 10, 1, 20, 0),
        payment=500,
        status="scheduled",
        show_type="standard",
        venue=venue,
    )


@pytest.fixture
def profile() -> ProfileSchema:
    return ProfileSchema(
        profile_id=uuid4(),
        user_id=uuid4(),
        display_name="Riff Raff",
        cash=1000,
        experience=900,
        fame=90,
        performance_skill=40,
        charisma=500,
        looks=250,
        musicality=800,
    )


@pytest.fixture
def settlement(gig, profile) -> SettlementSchema:
    return SettlementSchema(
        settlement_id=uuid4(),
        gig_id=gig.gig_id,
        profile_id=profile.profile_id,
        user_id=profile.user_id,
        venue_name="The Roxy",
        overall_score=72.4,
        attendance=724,
        earnings=1234,
        fan_gain=80,
        experience_gain=224,
        created_at=datetime(2026, 10, 1, 22, 0),
    )


@pytest.fixture
def store(gig, profile) -> FakeStore:
    fake_store = FakeStore()
    fake_store.gigs[gig.gig_id] = gig
    fake_store.profiles[profile.profile_id] = profile
    return fake_store


@pytest.fixture
def committer(store) -> ResultCommitter:
    return ResultCommitter(
        FakeGigRepository(store),
        FakeProfileRepository(store),
        FakeActivityLogRepository(store),
        FakeSettlementRepository(store),
    )
