# src/taskflow/tasks/latency.py

"""
Latency and fault hooks.

The engine and the store never call `random` directly; they ask an injected
policy. Production wiring uses the randomized simulators below, tests pass
deterministic callables (see tests/fakes.py).
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Outcome:
    delay: float  # seconds to suspend before completing
    ok: bool


class SimulatedNetwork:
    """Uniform delay in [min_delay, max_delay], Bernoulli failure with `failure_rate`."""

    def __init__(
        self,
        min_delay: float = 0.5,
        max_delay: float = 3.0,
        *,
        failure_rate: float = 0.15,
        rng: random.Random | None = None,
    ) -> None:
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError("expected 0 <= min_delay <= max_delay")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be within [0, 1]")
        self.min_delay = float(min_delay)
        self.max_delay = float(max_delay)
        self.failure_rate = float(failure_rate)
        self._rng = rng or random.Random()

    def __call__(self) -> Outcome:
        delay = self._rng.uniform(self.min_delay, self.max_delay)
        ok = self._rng.random() >= self.failure_rate
        return Outcome(delay=delay, ok=ok)


class UniformDelay:
    """Delay-only policy for storage I/O."""

    def __init__(self, min_delay: float = 0.1, max_delay: float = 0.3, *, rng: random.Random | None = None) -> None:
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError("expected 0 <= min_delay <= max_delay")
        self.min_delay = float(min_delay)
        self.max_delay = float(max_delay)
        self._rng = rng or random.Random()

    def __call__(self) -> float:
        return self._rng.uniform(self.min_delay, self.max_delay)
