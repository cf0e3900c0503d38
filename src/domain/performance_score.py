from src.models.dc_models import PerformanceMetricsModel, ScoreBadgeModel

METRIC_CEILING = 100.0

# Lower bounds are inclusive.
BADGE_TIERS = (
    (90, ScoreBadgeModel.legendary),
    (80, ScoreBadgeModel.excellent),
    (70, ScoreBadgeModel.great),
    (60, ScoreBadgeModel.good),
)


def aggregate_score(metrics: PerformanceMetricsModel) -> float:
    """Collapse the three performance metrics into the overall score.

    Args:
        metrics (PerformanceMetricsModel): Metrics at the end of a run

    Returns:
        float: Average of crowd energy, technical skill and stage presence, in [0, 100]
    """
    total = metrics.crowd_energy + metrics.technical_skill + metrics.stage_presence
    return total / 3


def score_badge(score: float) -> ScoreBadgeModel:
    for lower_bound, badge in BADGE_TIERS:
        if score >= lower_bound:
            return badge
    return ScoreBadgeModel.needs_work
