import pytest

from src.domain.performance_score import aggregate_score, score_badge
from src.models.dc_models import PerformanceMetricsModel, ScoreBadgeModel


def test_aggregate_score_is_the_mean():
    metrics = PerformanceMetricsModel(crowd_energy=90, technical_skill=60, stage_presence=30)
    assert aggregate_score(metrics) == pytest.approx(60)


def test_aggregate_score_bounds():
    assert aggregate_score(PerformanceMetricsModel()) == 0
    full = PerformanceMetricsModel(crowd_energy=100, technical_skill=100, stage_presence=100)
    assert aggregate_score(full) == 100


@pytest.mark.parametrize(
    "score, badge",
    [
        (100, ScoreBadgeModel.legendary),
        (90, ScoreBadgeModel.legendary),
        (89.999, ScoreBadgeModel.excellent),
        (80, ScoreBadgeModel.excellent),
        (70, ScoreBadgeModel.great),
        (69.999, ScoreBadgeModel.good),
        (60, ScoreBadgeModel.good),
        (59.9, ScoreBadgeModel.needs_work),
        (0, ScoreBadgeModel.needs_work),
    ],
)
def test_score_badge_boundaries(score, badge):
    assert score_badge(score) == badge


def test_badge_labels():
    assert score_badge(95).value == "Legendary"
    assert score_badge(10).value == "Needs Work"
