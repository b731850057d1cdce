#!/usr/bin/env python3
"""
Guided Cooking Mode
Steps through a recipe's instructions one at a time with a timer for each
step that has a duration.
"""

import time
from typing import Callable, Dict, List, Optional, Any

from error_handling import CookingSessionError
from recipe_models import Recipe, CookingStep


class StepTimer:
    """Countdown timer for a single cooking step."""

    def __init__(self, duration_minutes: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            duration_minutes: Step duration, None or 0 for untimed steps
            clock: Monotonic clock returning seconds
        """
        self.duration_seconds = max(0.0, float(duration_minutes or 0) * 60)
        self._clock = clock
        self._started_at: Optional[float] = None
        self._accumulated = 0.0

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def start(self):
        if not self.is_running:
            self._started_at = self._clock()

    def pause(self):
        if self.is_running:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def resume(self):
        self.start()

    def reset(self):
        self._started_at = None
        self._accumulated = 0.0

    def elapsed(self) -> float:
        """Seconds the timer has been running."""
        elapsed = self._accumulated
        if self.is_running:
            elapsed += self._clock() - self._started_at
        return elapsed

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(0.0, self.duration_seconds - self.elapsed())

    def is_finished(self) -> bool:
        return self.duration_seconds > 0 and self.remaining() == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'duration_seconds': self.duration_seconds,
            'remaining_seconds': self.remaining(),
            'running': self.is_running,
            'finished': self.is_finished(),
        }


class CookingSession:
    """Cooking mode position within a recipe's steps."""

    def __init__(self, recipe: Recipe, clock: Callable[[], float] = time.monotonic):
        self.recipe = recipe
        self.steps: List[CookingStep] = recipe.sorted_steps()
        if not self.steps:
            raise CookingSessionError(f"Recipe {recipe.name} has no steps",
                                      details={'recipe_id': recipe.id})

        self._clock = clock
        self.current_index = 0
        self.timer = self._new_timer()

    def _new_timer(self) -> StepTimer:
        return StepTimer(self.current_step.duration, clock=self._clock)

    @property
    def current_step(self) -> CookingStep:
        return self.steps[self.current_index]

    @property
    def is_first_step(self) -> bool:
        return self.current_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.current_index == len(self.steps) - 1

    def _move_to(self, index: int) -> bool:
        if index == self.current_index or not 0 <= index < len(self.steps):
            return False
        self.current_index = index
        self.timer = self._new_timer()
        return True

    def next_step(self) -> bool:
        """Advance one step; False when already on the last step."""
        return self._move_to(self.current_index + 1)

    def previous_step(self) -> bool:
        """Go back one step; False when already on the first step."""
        return self._move_to(self.current_index - 1)

    def go_to(self, step_number: int) -> CookingStep:
        """Jump to the step with the given step number."""
        for index, step in enumerate(self.steps):
            if step.step_number == step_number:
                self._move_to(index)
                return step
        raise CookingSessionError(f"Step {step_number} not found",
                                  details={'recipe_id': self.recipe.id, 'step_number': step_number})

    def progress(self) -> float:
        """Fraction of steps reached, 1.0 on the last step."""
        return (self.current_index + 1) / len(self.steps)

    def total_duration_minutes(self) -> float:
        return sum(step.duration or 0 for step in self.steps)

    def summary(self) -> Dict[str, Any]:
        step = self.current_step
        return {
            'recipe_id': self.recipe.id,
            'recipe_name': self.recipe.name,
            'step_number': step.step_number,
            'step_count': len(self.steps),
            'description': step.description,
            'temperature': step.temperature,
            'progress': self.progress(),
            'is_last_step': self.is_last_step,
            'timer': self.timer.to_dict(),
        }
