"""
Creatures: a genome, a position and a step counter.

A creature is immutable; stepping it returns its successor. The brain is
compiled once from the genome at spawn time and travels with the creature.
"""
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Optional, Tuple

from .brain import Brain, CreatureState, MoveVector
from .genome import Genome
from .world import World


class TerminalState(NamedTuple):
    """A creature as seen by a fitness predicate at the end of a generation."""
    x: int
    y: int
    steps: int
    width: int
    height: int


@dataclass(frozen=True)
class Creature:
    genome: Genome
    pos: Tuple[int, int]
    steps: int = 0
    brain: Optional[Brain] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.brain is None:
            object.__setattr__(self, "brain", Brain.from_genome(self.genome))

    def state(self, world: World) -> CreatureState:
        x, y = self.pos
        return CreatureState(x, y, self.steps, world.width, world.height, world.cfg.iterations)

    def desired_move(self, world: World) -> MoveVector:
        return self.brain.move(self.state(world))

    def step(self, world: World) -> "Creature":
        move = self.desired_move(world)
        reach = world.cfg.max_step
        x, y = self.pos
        pos = world.clamp(x + round(move.dx * reach), y + round(move.dy * reach))
        return replace(self, pos=pos, steps=self.steps + 1)

    def terminal_state(self, world: World) -> TerminalState:
        x, y = self.pos
        return TerminalState(x, y, self.steps, world.width, world.height)


def spawn(genome: Genome, pos: Tuple[int, int], num_internal: int = 3,
          brain: Optional[Brain] = None) -> Creature:
    if brain is None:
        brain = Brain.from_genome(genome, num_internal)
    return Creature(genome=genome, pos=(int(pos[0]), int(pos[1])), steps=0, brain=brain)


def step(creature: Creature, world: World) -> Creature:
    return creature.step(world)
