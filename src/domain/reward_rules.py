"""Reward settlement for a finished performance.

Attribute bonuses never scale the final reward directly. The payment and fan
formulas are evaluated twice, without bonuses (baseline) and with them
(adjusted), and only the adjusted/baseline ratio scales the base economy driven
by score, capacity and base payment. A zero baseline makes the ratio neutral.
"""

import math
from typing import Callable

from src.domain.game_balance import calculate_fan_gain, calculate_gig_payment
from src.domain.stage_rules import show_type_modifiers
from src.models.dc_models import (
    AttributeBonusesModel,
    RewardCalculationModel,
    RewardResultModel,
    ShowTypeModel,
)

DEFAULT_BASE_PAYMENT = 500
FAN_GAIN_PER_ATTENDEE = 0.1

GigPaymentFormula = Callable[..., float]
FanGainFormula = Callable[..., float]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _ratio(adjusted: float, baseline: float) -> float:
    if baseline > 0:
        return adjusted / baseline
    return 1.0


def calculate_reward(
    *,
    overall_score: float,
    venue_capacity: int,
    prestige_level: int,
    base_payment: int | None,
    show_type: str | ShowTypeModel | None,
    performance_skill: float,
    fame: float,
    stage_presence: float | None = None,
    attribute_bonuses: AttributeBonusesModel | None = None,
    gig_payment_formula: GigPaymentFormula = calculate_gig_payment,
    fan_gain_formula: FanGainFormula = calculate_fan_gain,
) -> RewardCalculationModel:
    """Convert a performance score into earnings, fan gain and experience.

    Args:
        overall_score (float): Overall score of the run, in [0, 100]
        venue_capacity (int): Venue capacity
        prestige_level (int): Venue prestige tier
        base_payment (int | None): Gig payment; DEFAULT_BASE_PAYMENT when missing
        show_type (str | ShowTypeModel | None): Show type of the gig
        performance_skill (float): Player performance skill (or the overall score)
        fame (float): Player fame
        stage_presence (float | None): Stage presence metric; the overall score when missing
        attribute_bonuses (AttributeBonusesModel | None): Player attribute multipliers
        gig_payment_formula: Payment formula, called as baseline and adjusted
        fan_gain_formula: Fan gain formula, called as baseline and adjusted

    Returns:
        RewardCalculationModel: Intermediate values and the final reward
    """
    modifiers = show_type_modifiers(show_type)
    if base_payment is None:
        base_payment = DEFAULT_BASE_PAYMENT
    if stage_presence is None:
        stage_presence = overall_score

    performance_multiplier = overall_score / 100
    attendance = max(1, math.floor(venue_capacity * performance_multiplier * modifiers.attendance))
    modified_base_payment = max(1, math.floor(base_payment * modifiers.payment))
    success_ratio = min(1.0, max(0.0, overall_score / 100))

    baseline_payment = gig_payment_formula(modified_base_payment, performance_skill, fame, success_ratio)
    if attribute_bonuses is None:
        adjusted_payment = baseline_payment
    else:
        adjusted_payment = gig_payment_formula(
            modified_base_payment, performance_skill, fame, success_ratio, attribute_bonuses
        )
    payout_adjustment = _ratio(adjusted_payment, baseline_payment)
    earnings = math.floor(modified_base_payment * performance_multiplier * payout_adjustment)

    base_fan_gain = math.floor(attendance * FAN_GAIN_PER_ATTENDEE * modifiers.fan_gain)
    formula_fan_base = max(1, base_fan_gain)
    baseline_fan_gain = fan_gain_formula(formula_fan_base, performance_skill, stage_presence)
    if attribute_bonuses is None:
        adjusted_fan_gain = baseline_fan_gain
    else:
        adjusted_fan_gain = fan_gain_formula(formula_fan_base, performance_skill, stage_presence, attribute_bonuses)
    fan_adjustment = _ratio(adjusted_fan_gain, baseline_fan_gain)
    fan_gain = max(0, _round_half_up(base_fan_gain * fan_adjustment))

    experience_gain = max(
        1, math.floor((50 + overall_score * 2 + prestige_level * 10) * modifiers.experience)
    )

    return RewardCalculationModel(
        performance_multiplier=performance_multiplier,
        attendance=attendance,
        base_payment=modified_base_payment,
        success_ratio=success_ratio,
        baseline_payment=baseline_payment,
        adjusted_payment=adjusted_payment,
        payout_adjustment=payout_adjustment,
        base_fan_gain=base_fan_gain,
        baseline_fan_gain=baseline_fan_gain,
        adjusted_fan_gain=adjusted_fan_gain,
        fan_adjustment=fan_adjustment,
        reward=RewardResultModel(
            earnings=max(0, earnings),
            fan_gain=fan_gain,
            experience_gain=experience_gain,
        ),
    )
