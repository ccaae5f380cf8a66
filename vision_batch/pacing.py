"""PacingPolicy — how long to wait between consecutive outbound calls."""
import random
from abc import ABC, abstractmethod

from vision_batch.constants import PACING_MAX_MS, PACING_MIN_MS


class PacingPolicy(ABC):
    @abstractmethod
    def delay(self) -> float:
        """Seconds to wait before the next analysis call."""
        ...


class UniformPacing(PacingPolicy):
    """Whole milliseconds drawn uniformly from the inclusive range [min_ms, max_ms]."""

    def __init__(
        self,
        min_ms: int = PACING_MIN_MS,
        max_ms: int = PACING_MAX_MS,
        rng: random.Random | None = None,
    ) -> None:
        match (min_ms, max_ms):
            case (lo, hi) if 0 <= lo <= hi:
                pass
            case _:
                raise ValueError(f"invalid pacing range [{min_ms}, {max_ms}]")
        self._min_ms = min_ms
        self._max_ms = max_ms
        self._rng = rng or random.Random()

    def delay(self) -> float:
        return self._rng.randint(self._min_ms, self._max_ms) / 1000


class FixedPacing(PacingPolicy):

    def __init__(self, ms: int = 0) -> None:
        if ms < 0:
            raise ValueError(f"invalid pacing delay {ms}")
        self._ms = ms

    def delay(self) -> float:
        return self._ms / 1000
