"""Tests for evo_creatures.fitness."""
from evo_creatures.agents import TerminalState
from evo_creatures.fitness import (
    CENTER_SQUARE, InsideRegion, always_survives, east_half, never_survives,
)


def at(x, y, width=128, height=128):
    return TerminalState(x, y, 1000, width, height)


class TestInsideRegion:
    """Open-interval box predicate."""

    def test_center_square_bounds_are_open(self):
        assert CENTER_SQUARE(at(31, 89))
        assert CENTER_SQUARE(at(60, 60))
        assert not CENTER_SQUARE(at(30, 60))
        assert not CENTER_SQUARE(at(60, 90))
        assert not CENTER_SQUARE(at(0, 0))

    def test_custom_region(self):
        region = InsideRegion(0, 10, 5, 6)
        assert region(at(1, 5.5))
        assert not region(at(1, 5))


class TestStockPredicates:
    """Trivial predicates used for testing and experiments."""

    def test_east_half(self):
        assert east_half(at(64, 0))
        assert not east_half(at(63, 0))

    def test_constants(self):
        assert always_survives(at(0, 0))
        assert not never_survives(at(60, 60))
