import asyncio
import logging
from typing import Protocol, Sequence

import numpy as np

from src.domain.performance_score import METRIC_CEILING, aggregate_score
from src.domain.stage_rules import stage_ranges
from src.errors import SimulationCancelled, SimulationStateError
from src.load_secrets import stage_time_scale
from src.models.dc_models import (
    PerformanceMetricsModel,
    ShowTypeModel,
    SimulationStateModel,
    StageDescriptorModel,
)


class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float in [0, 1)."""


class NumpyRandomSource:
    """RandomSource backed by a numpy Generator; pass a seed for reproducible runs."""

    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())


class PerformanceSimulator:
    """Drives a performance through its stages and accumulates the metrics.

    Stages run strictly in order. Each stage waits for its duration, then
    draws the show type's three contributions and applies them, clamping every
    metric at METRIC_CEILING.
    """

    def __init__(
        self,
        show_type: str | ShowTypeModel | None,
        random_source: RandomSource | None = None,
        time_scale: float = stage_time_scale,
    ):
        self.ranges = stage_ranges(show_type)
        self.random_source = random_source or NumpyRandomSource()
        self.time_scale = time_scale
        self.state = SimulationStateModel.idle
        self.stage_index = 0  # 1-based while running
        self.metrics = PerformanceMetricsModel()
        self._cancel_event = asyncio.Event()

    def _draw(self, bounds: tuple[float, float]) -> float:
        low, high = bounds
        return low + self.random_source.random() * (high - low)

    def _apply_stage(self):
        base_skill = self._draw(self.ranges.base_skill)
        crowd_bonus = self._draw(self.ranges.crowd_bonus)
        stage_presence_roll = self._draw(self.ranges.stage_presence_roll)

        self.metrics.crowd_energy = min(METRIC_CEILING, self.metrics.crowd_energy + crowd_bonus)
        self.metrics.technical_skill = min(METRIC_CEILING, self.metrics.technical_skill + base_skill / 4)
        self.metrics.stage_presence = min(METRIC_CEILING, self.metrics.stage_presence + stage_presence_roll / 4)

    async def _wait_stage(self, stage: StageDescriptorModel):
        """Suspend for the stage duration; return early if cancelled."""
        delay = stage.duration * self.time_scale
        try:
            await asyncio.wait_for(self._cancel_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

    def cancel(self):
        """Stop the run at the next suspension point."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    async def run(self, stage_plan: Sequence[StageDescriptorModel]) -> PerformanceMetricsModel:
        """Run every stage of the plan and return the final metrics.

        Args:
            stage_plan (Sequence[StageDescriptorModel]): Ordered stages to perform

        Raises:
            SimulationStateError: The simulator is already running or finished
            SimulationCancelled: cancel() was called before the last stage was applied

        Returns:
            PerformanceMetricsModel: Final metrics with overall_score set
        """
        if self.state != SimulationStateModel.idle:
            raise SimulationStateError(f"Cannot start a simulation in state {self.state.value}")

        self.metrics = PerformanceMetricsModel()
        self.state = SimulationStateModel.running
        try:
            for index, stage in enumerate(stage_plan, start=1):
                self.stage_index = index
                await self._wait_stage(stage)
                if self.cancelled:
                    raise SimulationCancelled(f"Cancelled during stage {index} ({stage.name})")
                self._apply_stage()
        except (SimulationCancelled, asyncio.CancelledError):
            self.state = SimulationStateModel.cancelled
            logging.info(f"Performance simulation cancelled at stage {self.stage_index}")
            raise

        self.metrics.overall_score = aggregate_score(self.metrics)
        self.state = SimulationStateModel.finished
        return self.metrics
