"""
Fitness predicates: decide, from a creature's terminal state alone, whether
its genome makes it into the next gene pool.

Any callable ``TerminalState -> bool`` works; the classes here are just the
stock ones.
"""
from dataclasses import dataclass
from typing import Protocol

from .agents import TerminalState


class FitnessPredicate(Protocol):
    def __call__(self, state: TerminalState) -> bool: ...


@dataclass(frozen=True)
class InsideRegion:
    """Survive when the final position is strictly inside the box."""
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __call__(self, state: TerminalState) -> bool:
        return self.x_min < state.x < self.x_max and self.y_min < state.y < self.y_max


CENTER_SQUARE = InsideRegion(30, 90, 30, 90)


def east_half(state: TerminalState) -> bool:
    return state.x >= state.width / 2


def always_survives(state: TerminalState) -> bool:
    return True


def never_survives(state: TerminalState) -> bool:
    return False
