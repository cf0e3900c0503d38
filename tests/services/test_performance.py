import asyncio
from uuid import uuid4

import pytest

from src.errors import GigLoadError, GigStateError
from src.models.dc_models import ScoreBadgeModel, ShowTypeModel
from src.services.performance import PerformanceService
from tests.fakes import FakeGigRepository, FakeProfileRepository, SequenceRandomSource


@pytest.fixture
def service(store, committer):
    return PerformanceService(
        FakeGigRepository(store),
        FakeProfileRepository(store),
        committer,
        random_source=SequenceRandomSource([0.5]),
        time_scale=0,
    )


def test_perform_gig_settles_rewards(service, store, gig, profile):
    result = asyncio.run(service.perform_gig(gig.gig_id, profile.profile_id))

    assert result.show_type == ShowTypeModel.standard
    assert [stage.name for stage in result.stages][0] == "Sound Check"
    assert result.overall_score == pytest.approx(134 / 3)
    assert result.badge == ScoreBadgeModel.needs_work
    assert result.commit.complete
    # floor(1000 * 0.4466)
    assert result.attendance == 446

    credited = store.profiles[profile.profile_id]
    assert credited.cash == profile.cash + result.reward.earnings
    assert credited.experience == profile.experience + result.reward.experience_gain
    assert credited.fame == profile.fame + result.reward.fan_gain
    assert store.gigs[gig.gig_id].status == "completed"
    assert result.player_level == 2
    assert result.fame_title == "Local Talent"


def test_missing_gig_is_a_load_failure(service, store, profile):
    with pytest.raises(GigLoadError):
        asyncio.run(service.perform_gig(uuid4(), profile.profile_id))
    assert "complete_gig" not in store.calls


def test_gig_without_venue_is_a_load_failure(service, store, gig, profile):
    store.gigs[gig.gig_id] = gig.model_copy(update={"venue": None})
    with pytest.raises(GigLoadError):
        asyncio.run(service.perform_gig(gig.gig_id, profile.profile_id))


def test_store_error_while_loading_is_a_load_failure(service, store, gig, profile):
    store.failing.add("read_gig")
    with pytest.raises(GigLoadError):
        asyncio.run(service.perform_gig(gig.gig_id, profile.profile_id))


def test_missing_profile_is_a_load_failure(service, gig):
    with pytest.raises(GigLoadError):
        asyncio.run(service.perform_gig(gig.gig_id, uuid4()))


def test_completed_gig_cannot_be_performed(service, store, gig, profile):
    store.gigs[gig.gig_id] = gig.model_copy(update={"status": "completed"})
    with pytest.raises(GigStateError):
        asyncio.run(service.perform_gig(gig.gig_id, profile.profile_id))


def test_result_is_returned_when_every_write_fails(service, store, gig, profile):
    store.failing.update({"open_settlement", "complete_gig", "increment_by", "append_activity"})
    result = asyncio.run(service.perform_gig(gig.gig_id, profile.profile_id))

    assert result.reward.experience_gain >= 1
    assert not result.commit.gig_updated
    assert not result.commit.profile_credited
    assert not result.commit.activity_logged
    assert store.profiles[profile.profile_id].cash == profile.cash


def test_stage_plan_follows_the_gig_show_type(service, store, gig):
    store.gigs[gig.gig_id] = gig.model_copy(update={"show_type": "acoustic"})
    stages = asyncio.run(service.stage_plan(gig.gig_id))
    assert stages[0].name == "Tuning"
