"""
Run configuration. Everything a run needs is fixed here before the first
generation; ``validate`` rejects anything the simulation cannot honour.
"""
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from .agents import TerminalState
from .brain import check_internal
from .exceptions import ConfigurationError
from .fitness import CENTER_SQUARE
from .genome import check_mutation
from .world import WorldConfig

EXTINCTION_POLICIES = ("abort", "reseed")


@dataclass
class SimulationConfig:
    pool_size: int = 200
    population_size: int = 400
    genome_length: int = 16
    iterations_per_generation: int = 1000
    generations: int = 10
    mutation_rate: float = 0.01
    mutation_mode: str = "resample"
    world_width: int = 128
    world_height: int = 128
    random_seed: int = 42
    fitness_predicate: Callable[[TerminalState], bool] = CENTER_SQUARE

    # brain / movement
    num_internal: int = 3
    max_step: int = 1
    initial_position: Optional[Tuple[int, int]] = None  # None -> uniform random spawn

    # execution
    workers: int = 1
    on_extinction: str = "abort"

    def validate(self) -> "SimulationConfig":
        for name in ("pool_size", "population_size", "genome_length",
                     "iterations_per_generation", "workers"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.generations < 0:
            raise ConfigurationError(f"generations must not be negative, got {self.generations}")
        if not 0 <= self.random_seed < 2 ** 64:
            raise ConfigurationError(f"random_seed must fit in 64 unsigned bits, got {self.random_seed}")
        check_mutation(self.mutation_rate, self.mutation_mode)
        check_internal(self.num_internal)
        if not callable(self.fitness_predicate):
            raise ConfigurationError("fitness_predicate must be callable")
        if self.on_extinction not in EXTINCTION_POLICIES:
            raise ConfigurationError(
                f"unknown extinction policy {self.on_extinction!r}; expected one of {EXTINCTION_POLICIES}")
        world = self.world_config()
        world.validate()
        if self.initial_position is not None:
            x, y = self.initial_position
            if not (0 <= x < world.width and 0 <= y < world.height):
                raise ConfigurationError(f"initial position {self.initial_position} lies outside the world")
        return self

    def world_config(self) -> WorldConfig:
        return WorldConfig(
            width=self.world_width,
            height=self.world_height,
            iterations=self.iterations_per_generation,
            max_step=self.max_step,
        )

    def with_overrides(self, **changes) -> "SimulationConfig":
        return replace(self, **changes).validate()
