"""Game balance formulas shared by the reward calculation.

The payment and fan-gain formulas are called twice per performance: once
without attribute bonuses (baseline) and once with them (adjusted). Both must
return the baseline value when bonuses are omitted or all neutral.
"""

from src.models.dc_models import AttributeBonusesModel

EXPERIENCE_PER_LEVEL = 1000
MAX_LEVEL = 100
MAX_ATTRIBUTE_SCORE = 1000

# Ordered from highest to lowest.
FAME_TITLES = (
    (100000, "Living Legend"),
    (50000, "Global Icon"),
    (15000, "National Act"),
    (5000, "Regional Star"),
    (1000, "Known Performer"),
    (500, "Rising Artist"),
    (100, "Local Talent"),
)

NEUTRAL_BONUSES = AttributeBonusesModel()


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return min(maximum, max(minimum, value))


def calculate_gig_payment(
    base_payment: float,
    performance_skill: float,
    fame: float,
    success_ratio: float,
    attribute_bonuses: AttributeBonusesModel | None = None,
) -> float:
    """Payment for a gig before the performance multiplier is applied.

    Args:
        base_payment (float): Gig base payment after show-type modifiers
        performance_skill (float): Player performance skill (or the overall score)
        fame (float): Player fame
        success_ratio (float): Overall score scaled to [0, 1]
        attribute_bonuses (AttributeBonusesModel | None): Player attribute multipliers

    Returns:
        float: Payment amount
    """
    bonuses = attribute_bonuses or NEUTRAL_BONUSES
    skill_multiplier = 1 + performance_skill / 100
    fame_multiplier = 1 + fame / 10000
    performance_multiplier = 0.5 + _clamp(success_ratio, 0, 1) * 0.5
    return (
        base_payment
        * skill_multiplier
        * fame_multiplier
        * performance_multiplier
        * bonuses.stage_presence
        * bonuses.crowd_engagement
    )


def calculate_fan_gain(
    base_fan_gain: float,
    performance_skill: float,
    stage_presence: float,
    attribute_bonuses: AttributeBonusesModel | None = None,
) -> float:
    """Fans won by a performance.

    Args:
        base_fan_gain (float): Fan gain from attendance after show-type modifiers
        performance_skill (float): Player performance skill (or the overall score)
        stage_presence (float): Stage presence metric of the run (or the overall score)
        attribute_bonuses (AttributeBonusesModel | None): Player attribute multipliers

    Returns:
        float: Fan gain
    """
    bonuses = attribute_bonuses or NEUTRAL_BONUSES
    skill_multiplier = 1 + performance_skill / 200
    presence_multiplier = 1 + _clamp(stage_presence, 0, 100) / 400
    return (
        base_fan_gain
        * skill_multiplier
        * presence_multiplier
        * bonuses.crowd_engagement
        * bonuses.social_reach
    )


def clamp_attribute_score(value: float | None) -> float:
    """Normalize a stored attribute score onto the 0-1000 scale.

    Legacy rows store attributes as multipliers in (0, 3]; those are mapped
    linearly so that 1 becomes 0 and 3 becomes 1000.
    """
    if value is None:
        return 0
    if 0 <= value <= 3:
        return _clamp(round((value - 1) / 2 * MAX_ATTRIBUTE_SCORE), 0, MAX_ATTRIBUTE_SCORE)
    return _clamp(round(value), 0, MAX_ATTRIBUTE_SCORE)


def _normalized_to_multiplier(normalized: float, max_bonus: float) -> float:
    return 1 + _clamp(normalized, 0, MAX_ATTRIBUTE_SCORE) / MAX_ATTRIBUTE_SCORE * max_bonus


def attribute_score_to_multiplier(value: float | None, max_bonus: float = 0.5) -> float:
    """Turn a stored attribute score into a multiplier in [1, 1 + max_bonus]."""
    return _normalized_to_multiplier(clamp_attribute_score(value), max_bonus)


def attribute_bonuses_from_scores(
    charisma: float | None,
    looks: float | None,
    musicality: float | None = None,
) -> AttributeBonusesModel:
    """Derive the performance bonuses from a player's attribute scores."""
    presence_score = 0.6 * clamp_attribute_score(charisma) + 0.4 * clamp_attribute_score(looks)
    engagement_score = 0.75 * clamp_attribute_score(charisma) + 0.25 * clamp_attribute_score(musicality)
    return AttributeBonusesModel(
        stage_presence=_normalized_to_multiplier(presence_score, max_bonus=0.45),
        crowd_engagement=_normalized_to_multiplier(engagement_score, max_bonus=0.4),
        social_reach=attribute_score_to_multiplier(looks, max_bonus=0.3),
    )


def calculate_level(experience: int) -> int:
    return min(experience // EXPERIENCE_PER_LEVEL + 1, MAX_LEVEL)


def get_fame_title(fame: int) -> str:
    for threshold, title in FAME_TITLES:
        if fame >= threshold:
            return title
    return "Unknown Artist"
