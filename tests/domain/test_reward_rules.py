import pytest

from src.domain.reward_rules import calculate_reward
from src.models.dc_models import AttributeBonusesModel


def stub_gig_payment(base, skill, fame, ratio, bonuses=None):
    return base * ratio * (1.2 if bonuses is not None else 1)


def stub_fan_gain(base, skill, presence, bonuses=None):
    return base * (1.2 if bonuses is not None else 1)


def scenario(**overrides):
    arguments = dict(
        overall_score=80,
        venue_capacity=1000,
        prestige_level=3,
        base_payment=500,
        show_type="standard",
        performance_skill=80,
        fame=0,
        attribute_bonuses=AttributeBonusesModel(),
        gig_payment_formula=stub_gig_payment,
        fan_gain_formula=stub_fan_gain,
    )
    arguments.update(overrides)
    return calculate_reward(**arguments)


def test_standard_scenario():
    calculation = scenario()
    assert calculation.performance_multiplier == pytest.approx(0.8)
    assert calculation.attendance == 800
    assert calculation.base_payment == 500
    assert calculation.baseline_payment == pytest.approx(400)
    assert calculation.adjusted_payment == pytest.approx(480)
    assert calculation.payout_adjustment == pytest.approx(1.2)
    assert calculation.reward.earnings == 480
    assert calculation.base_fan_gain == 80
    assert calculation.reward.fan_gain == 96
    assert calculation.reward.experience_gain == 240


def test_acoustic_scenario():
    calculation = scenario(show_type="acoustic")
    assert calculation.attendance == 640
    assert calculation.base_fan_gain == 83
    # floor((50 + 160 + 30) * 1.15)
    assert calculation.reward.experience_gain == 276


def test_zero_score_scenario():
    calculation = scenario(overall_score=0, prestige_level=0)
    assert calculation.attendance == 1
    assert calculation.reward.earnings == 0
    assert calculation.reward.fan_gain == 0
    assert calculation.reward.experience_gain == 50

    acoustic = scenario(overall_score=0, show_type="acoustic", prestige_level=0)
    assert acoustic.reward.experience_gain == 57


def test_missing_base_payment_defaults_to_500():
    assert scenario(base_payment=None).base_payment == 500


def test_unknown_show_type_uses_standard_modifiers():
    assert scenario(show_type="festival") == scenario()


def test_zero_baseline_gives_neutral_adjustment():
    calculation = scenario(
        gig_payment_formula=lambda *args: 0,
        fan_gain_formula=lambda *args: 0,
    )
    assert calculation.payout_adjustment == 1
    assert calculation.fan_adjustment == 1
    assert calculation.reward.earnings == 400
    assert calculation.reward.fan_gain == 80


def test_bonuses_only_scale_through_the_ratio():
    bonuses = AttributeBonusesModel(stage_presence=1.25, crowd_engagement=1.2, social_reach=1.1)
    calculation = calculate_reward(
        overall_score=50,
        venue_capacity=400,
        prestige_level=1,
        base_payment=1000,
        show_type="standard",
        performance_skill=60,
        fame=3000,
        attribute_bonuses=bonuses,
    )
    assert calculation.payout_adjustment == pytest.approx(1.5)
    assert calculation.reward.earnings == 750
    assert calculation.fan_adjustment == pytest.approx(1.32)
    # round(20 * 1.32)
    assert calculation.reward.fan_gain == 26


def test_neutral_bonuses_match_absent_bonuses():
    common = dict(
        venue_capacity=750,
        prestige_level=2,
        base_payment=640,
        show_type="acoustic",
        performance_skill=35,
        fame=1200,
        stage_presence=40,
    )
    for score in (0, 12.5, 47, 63.3, 100):
        with_neutral = calculate_reward(overall_score=score, attribute_bonuses=AttributeBonusesModel(), **common)
        without = calculate_reward(overall_score=score, attribute_bonuses=None, **common)
        assert with_neutral.payout_adjustment == 1
        assert with_neutral.fan_adjustment == 1
        assert with_neutral.reward == without.reward


@pytest.mark.parametrize(
    "bonuses",
    [None, AttributeBonusesModel(), AttributeBonusesModel(stage_presence=1.25, crowd_engagement=1.5, social_reach=1.2)],
)
@pytest.mark.parametrize("show_type", ["standard", "acoustic"])
def test_rewards_are_monotonic_in_score(bonuses, show_type):
    previous = None
    for score in range(0, 101):
        calculation = calculate_reward(
            overall_score=score,
            venue_capacity=1200,
            prestige_level=4,
            base_payment=800,
            show_type=show_type,
            performance_skill=50,
            fame=500,
            stage_presence=50,
            attribute_bonuses=bonuses,
        )
        if previous is not None:
            assert calculation.reward.earnings >= previous.reward.earnings
            assert calculation.attendance >= previous.attendance
            assert calculation.reward.experience_gain >= previous.reward.experience_gain
        previous = calculation


@pytest.mark.parametrize("score", [0, 0.5, 33.3, 99.99, 100])
@pytest.mark.parametrize("capacity", [0, 1, 150, 20000])
@pytest.mark.parametrize("base_payment", [0, 1, 500, None])
def test_floors_and_clamps(score, capacity, base_payment):
    calculation = calculate_reward(
        overall_score=score,
        venue_capacity=capacity,
        prestige_level=0,
        base_payment=base_payment,
        show_type="acoustic",
        performance_skill=0,
        fame=0,
        attribute_bonuses=AttributeBonusesModel(stage_presence=1.1),
    )
    assert calculation.attendance >= 1
    assert calculation.base_payment >= 1
    assert calculation.reward.earnings >= 0
    assert calculation.reward.fan_gain >= 0
    assert calculation.reward.experience_gain >= 1
