"""
Runner: one generation at a time, then the evolution loop on top.

A generation goes Spawning -> Running -> Evaluating -> Harvesting -> Done.
Every random draw (spawn genomes, spawn positions, harvest picks, mutation)
comes from the single generator owned by the loop, so a seed replays a whole
run exactly.
"""
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple
import logging
import numpy as np
from tqdm import trange

from .agents import Creature, TerminalState, spawn
from .brain import Brain
from .config import SimulationConfig
from .exceptions import DegenerateGenerationError, GenomeError
from .genome import GenePool, Genome, mutate
from .world import World

logger = logging.getLogger(__name__)


class GenerationPhase(Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    RUNNING = "running"
    EVALUATING = "evaluating"
    HARVESTING = "harvesting"
    DONE = "done"


class GenerationStatus(Enum):
    COMPLETE = "complete"
    DEGENERATE = "degenerate"  # nobody survived, no gene pool


class TickSnapshot(NamedTuple):
    generation: int
    tick: int
    positions: np.ndarray


@dataclass(frozen=True, eq=False)
class GenerationResult:
    index: int
    status: GenerationStatus
    positions: np.ndarray      # (n, 2) terminal x, y
    survivor_mask: np.ndarray  # (n,) bool
    gene_pool: Optional[GenePool]
    tick: int                  # world tick the positions were taken at (the last one)

    @property
    def survivor_count(self) -> int:
        return int(self.survivor_mask.sum())

    @property
    def degenerate(self) -> bool:
        return self.status is GenerationStatus.DEGENERATE

    @property
    def survival_rate(self) -> float:
        n = len(self.survivor_mask)
        return self.survivor_count / n if n else 0.0

    def summary(self) -> Dict[str, object]:
        return {
            "generation": self.index,
            "status": self.status.value,
            "population": len(self.survivor_mask),
            "survivors": self.survivor_count,
            "survival_rate": round(self.survival_rate, 4),
            "tick": self.tick,
        }


def positions_of(population: Sequence[Creature]) -> np.ndarray:
    return np.array([c.pos for c in population], dtype=np.int64).reshape(-1, 2)


def harvest(survivors: Sequence[Genome], rng: np.random.Generator, pool_size: int,
            rate: float, mode: str = "resample", genome_length: Optional[int] = None) -> GenePool:
    """Truncation selection: draw ``pool_size`` survivor genomes with
    replacement and mutate each draw independently."""
    picks = rng.integers(0, len(survivors), size=pool_size)
    return GenePool([mutate(survivors[i], rng, rate, mode) for i in picks], genome_length)


class GenerationRunner:
    def __init__(self, config: SimulationConfig,
                 predicate: Optional[Callable[[TerminalState], bool]] = None,
                 executor: Optional[Executor] = None):
        self.config = config.validate()
        self.predicate = predicate if predicate is not None else config.fitness_predicate
        self.executor = executor
        self.phase = GenerationPhase.IDLE

    def _enter(self, phase: GenerationPhase, index: int) -> None:
        self.phase = phase
        logger.debug("generation %d: %s", index, phase.value)

    def spawn(self, pool: GenePool, world: World, rng: np.random.Generator) -> List[Creature]:
        cfg = self.config
        genomes = pool.sample(rng, cfg.population_size)
        if cfg.initial_position is None:
            starts = [world.random_position(rng) for _ in genomes]
        else:
            starts = [tuple(cfg.initial_position)] * len(genomes)

        brains: Dict[Genome, Brain] = {}
        population = []
        for g, start in zip(genomes, starts):
            if g not in brains:
                brains[g] = Brain.from_genome(g, cfg.num_internal)
            population.append(spawn(g, start, brain=brains[g]))
        return population

    def evaluate(self, population: Sequence[Creature], world: World) -> np.ndarray:
        return np.array([bool(self.predicate(c.terminal_state(world))) for c in population], dtype=bool)

    def run(self, index: int, pool: GenePool, rng: np.random.Generator,
            on_tick: Optional[Callable[[TickSnapshot], None]] = None) -> GenerationResult:
        cfg = self.config
        if pool.genome_length != cfg.genome_length:
            raise GenomeError(f"gene pool holds genomes of length {pool.genome_length}, "
                              f"configured length is {cfg.genome_length}")

        self._enter(GenerationPhase.SPAWNING, index)
        world = World(cfg.world_config())
        population = self.spawn(pool, world, rng)

        self._enter(GenerationPhase.RUNNING, index)
        while not world.done:
            population = world.step(population, self.executor)
            if on_tick is not None:
                on_tick(TickSnapshot(index, world.tick, positions_of(population)))

        self._enter(GenerationPhase.EVALUATING, index)
        mask = self.evaluate(population, world)

        self._enter(GenerationPhase.HARVESTING, index)
        survivors = [c.genome for c, alive in zip(population, mask) if alive]
        if survivors:
            new_pool = harvest(survivors, rng, cfg.pool_size, cfg.mutation_rate,
                               cfg.mutation_mode, cfg.genome_length)
            status = GenerationStatus.COMPLETE
        else:
            new_pool = None
            status = GenerationStatus.DEGENERATE

        self._enter(GenerationPhase.DONE, index)
        return GenerationResult(index, status, positions_of(population), mask, new_pool, world.tick)


def simulate(genome: Genome, config: Optional[SimulationConfig] = None,
             pos: Optional[Tuple[int, int]] = None) -> Dict[str, object]:
    """Run a single creature through one generation's worth of ticks."""
    cfg = (config or SimulationConfig()).validate()
    world = World(cfg.world_config())
    if pos is None:
        pos = cfg.initial_position or (world.width // 2, world.height // 2)
    creature = spawn(genome, world.clamp(*pos), cfg.num_internal)
    path = [creature.pos]
    while not world.done:
        creature = world.step([creature])[0]
        path.append(creature.pos)
    terminal = creature.terminal_state(world)
    return {
        "terminal": terminal,
        "alive": bool(cfg.fitness_predicate(terminal)),
        "path": np.array(path, dtype=np.int64),
        "unique_tiles": len(set(path)),
    }


class EvolutionLoop:
    """
    Drives ``config.generations`` generations. ``run`` yields each
    GenerationResult as soon as it is available; what happens after a
    generation without survivors is the caller's ``on_extinction`` choice.
    """

    def __init__(self, config: SimulationConfig,
                 on_tick: Optional[Callable[[TickSnapshot], None]] = None,
                 progress: bool = True):
        self.config = config.validate()
        self.on_tick = on_tick
        self.progress = progress
        self.rng = np.random.default_rng(config.random_seed)
        self.pool: Optional[GenePool] = None
        self.history: List[Tuple[int, int]] = []

    def _random_pool(self) -> GenePool:
        return GenePool.random(self.config.pool_size, self.config.genome_length, self.rng)

    def run(self) -> Iterator[GenerationResult]:
        """Start from the seed every time, so repeated calls replay the same run."""
        cfg = self.config
        self.rng = np.random.default_rng(cfg.random_seed)
        self.history = []
        self.pool = self._random_pool()
        executor = ThreadPoolExecutor(max_workers=cfg.workers) if cfg.workers > 1 else None
        try:
            runner = GenerationRunner(cfg, executor=executor)
            for index in trange(cfg.generations, desc="evolve", disable=not self.progress):
                result = runner.run(index, self.pool, self.rng, on_tick=self.on_tick)
                self.history.append((index, result.survivor_count))
                logger.info("generation %d: %d/%d survivors",
                            index, result.survivor_count, cfg.population_size)
                yield result

                if not result.degenerate:
                    self.pool = result.gene_pool
                elif cfg.on_extinction == "abort":
                    raise DegenerateGenerationError(result)
                else:
                    logger.warning("generation %d left no survivors, reseeding a random gene pool", index)
                    self.pool = self._random_pool()
        finally:
            if executor is not None:
                executor.shutdown()


def evolve(config: Optional[SimulationConfig] = None, progress: bool = True,
           **overrides) -> List[GenerationResult]:
    cfg = config or SimulationConfig()
    if overrides:
        cfg = cfg.with_overrides(**overrides)
    return list(EvolutionLoop(cfg, progress=progress).run())
