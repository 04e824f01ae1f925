# pourover/services/timer.py
# Brew clock + live status readout
# start → pause → start resumes from the paused time; reset zeroes everything.

from __future__ import annotations
import math
import time
from typing import Callable, Optional

from pourover.models.schemas import BrewStatusOut, Recipe
from pourover.services.curve import InvalidInputError, scale_points, target_weight

class BrewTimer:
    """Stopwatch for one brew. ``clock`` returns seconds (monotonic)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._paused_elapsed = 0.0

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return self._paused_elapsed
        return self._clock() - self._started_at

    def start(self) -> None:
        if self.is_running:
            return
        # shift the origin back so elapsed continues from the paused value
        self._started_at = self._clock() - self._paused_elapsed

    def pause(self) -> None:
        if not self.is_running:
            return
        self._paused_elapsed = self.elapsed
        self._started_at = None

    def reset(self) -> None:
        self._started_at = None
        self._paused_elapsed = 0.0

def format_clock(seconds: float) -> str:
    # "m:ss"
    seconds = max(seconds, 0.0)
    mins = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{mins}:{secs:02d}"

def progress(elapsed: float, total_time: float) -> float:
    """Percent of the recipe's total time, clamped to 0..100."""
    if total_time <= 0:
        return 100.0
    return max(0.0, min(elapsed / total_time * 100.0, 100.0))

def brew_status(recipe: Recipe, elapsed: float, scale: float = 1.0) -> BrewStatusOut:
    if not math.isfinite(elapsed):
        raise InvalidInputError(f"elapsed time must be finite, got {elapsed}")
    points = recipe.targetPoints if scale == 1 else scale_points(recipe.targetPoints, scale)
    return BrewStatusOut(
        recipeId=recipe.id,
        time=elapsed,
        clock=format_clock(elapsed),
        progress=progress(elapsed, recipe.totalTime),
        targetWeight=target_weight(points, elapsed),
        scale=scale,
        finished=elapsed >= recipe.totalTime,
    )
