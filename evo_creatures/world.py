"""
World: fixed bounds plus a tick counter for one generation.

The coordinate system has (0, 0) at the bottom left; x grows east, y north.
Creatures never interact, so a tick is a plain map over the population and
may run on an executor without changing the outcome.
"""
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .exceptions import ConfigurationError, SimulationError


@dataclass
class WorldConfig:
    width: int = 128
    height: int = 128
    iterations: int = 1000
    max_step: int = 1

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"world dimensions must be positive, got {self.width}x{self.height}")
        if self.iterations <= 0:
            raise ConfigurationError(f"iterations per generation must be positive, got {self.iterations}")
        if self.max_step <= 0:
            raise ConfigurationError(f"max_step must be positive, got {self.max_step}")


class World:
    def __init__(self, cfg: WorldConfig):
        cfg.validate()
        self.cfg = cfg
        self.tick = 0

    @property
    def width(self) -> int:
        return self.cfg.width

    @property
    def height(self) -> int:
        return self.cfg.height

    @property
    def done(self) -> bool:
        return self.tick >= self.cfg.iterations

    # ---------- geometry ----------
    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        x = int(np.clip(x, 0, self.cfg.width - 1))
        y = int(np.clip(y, 0, self.cfg.height - 1))
        return x, y

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.cfg.width and 0 <= y < self.cfg.height

    def random_position(self, rng: np.random.Generator) -> Tuple[int, int]:
        return int(rng.integers(0, self.cfg.width)), int(rng.integers(0, self.cfg.height))

    # ---------- dynamics ----------
    def step(self, population: Sequence, executor: Optional[Executor] = None) -> List:
        """Advance every creature once and return the new population (same order)."""
        if self.done:
            raise SimulationError(f"world already ran its {self.cfg.iterations} ticks")
        if executor is None:
            population = [c.step(self) for c in population]
        else:
            population = list(executor.map(lambda c: c.step(self), population))
        self.tick += 1
        return population
