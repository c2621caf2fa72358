"""Tests for evo_creatures.brain."""
import math

import numpy as np
import pytest

from evo_creatures.brain import Brain, CreatureState, decode_move, describe_gene, sensors
from evo_creatures.exceptions import ConfigurationError
from evo_creatures.genome import Genome, make_gene, random_genome

STATE = CreatureState(x=10, y=20, step=3, width=128, height=128, lifespan=1000)


class TestSensors:
    """Sensor vector computed from a creature's state."""

    def test_corner(self):
        s = sensors(CreatureState(0, 0, 0, 128, 128, 1000))
        assert s[0] == 0.0 and s[1] == 0.0   # location
        assert s[2] == 0.0                   # age
        assert s[4] == 0.0                   # on the boundary
        assert s[5] == 1.0                   # bias

    def test_far_corner_and_centre(self):
        s = sensors(CreatureState(127, 127, 500, 128, 128, 1000))
        assert s[0] == 1.0 and s[1] == 1.0
        assert s[2] == 0.5
        centre = sensors(CreatureState(64, 64, 0, 128, 128, 1000))
        assert centre[4] == pytest.approx(63 / 63.5)

    def test_single_cell_world(self):
        s = sensors(CreatureState(0, 0, 0, 1, 1, 1))
        assert np.all(np.isfinite(s))


class TestDecodeMove:
    """Genome -> movement decoding."""

    def test_silent_genome_does_not_move(self, walker):
        assert decode_move(walker(), STATE) == (0.0, 0.0)

    def test_direct_bias_connections(self, walker):
        move = decode_move(walker(wx=8192, wy=-16384), STATE)
        assert move.dx == pytest.approx(math.tanh(1.0))
        assert move.dy == pytest.approx(math.tanh(-2.0))

    def test_repeated_connections_add_up(self):
        genes = [make_gene(5, 0x80, 4096), make_gene(5, 0x80, 4096), make_gene(0, 0, 0)]
        assert decode_move(Genome(genes), STATE).dx == pytest.approx(math.tanh(1.0))

    def test_path_through_internal_neuron(self):
        genes = [
            make_gene(5, 0x00, 8192),     # BIAS -> N0
            make_gene(0x80, 0x80, 8192),  # N0 -> MOVE_X
        ]
        move = decode_move(Genome(genes), STATE, num_internal=3)
        assert move.dx == pytest.approx(math.tanh(math.tanh(1.0)))
        assert move.dy == 0.0

    def test_internal_connections_dropped_without_internal_neurons(self):
        genes = [make_gene(5, 0x00, 8192), make_gene(0x80, 0x80, 8192)]
        assert decode_move(Genome(genes), STATE, num_internal=0) == (0.0, 0.0)

    def test_deterministic(self, rng):
        for _ in range(10):
            g = random_genome(16, rng)
            assert decode_move(g, STATE) == decode_move(g, STATE)
            brain = Brain.from_genome(g)
            assert brain.move(STATE) == decode_move(g, STATE)

    def test_output_is_bounded(self, rng):
        for _ in range(20):
            move = decode_move(random_genome(16, rng), STATE)
            assert -1.0 <= move.dx <= 1.0
            assert -1.0 <= move.dy <= 1.0

    def test_rejects_bad_internal_count(self, walker):
        with pytest.raises(ConfigurationError):
            Brain.from_genome(walker(), num_internal=128)


class TestDescribeGene:
    """Readable gene dump."""

    def test_sensor_to_action(self):
        text = describe_gene(make_gene(5, 0x80, 8192))
        assert text.startswith("05802000")
        assert "BIAS -> MOVE_X" in text
        assert "+1.000" in text

    def test_internal_neurons(self):
        assert "N1 -> N2" in describe_gene(make_gene(0x81, 0x02, 0), num_internal=3)
        assert "unused" in describe_gene(make_gene(0x81, 0x02, 0), num_internal=0)
