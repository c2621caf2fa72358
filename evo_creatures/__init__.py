"""
evo_creatures: creatures steered by genome-encoded brains, selected each
generation by where they end up.
"""
from .agents import Creature, TerminalState, spawn, step
from .brain import Brain, CreatureState, MoveVector, decode_move
from .config import SimulationConfig
from .exceptions import (
    ConfigurationError, DegenerateGenerationError, EvolutionError, GenomeError, SimulationError,
)
from .fitness import CENTER_SQUARE, FitnessPredicate, InsideRegion
from .genome import GenePool, Genome, mutate, random_genome
from .runner import (
    EvolutionLoop, GenerationResult, GenerationRunner, GenerationStatus, TickSnapshot, evolve, simulate,
)
from .world import World, WorldConfig

__version__ = "0.1.0"
