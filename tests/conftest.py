import numpy as np
import pytest

from evo_creatures.config import SimulationConfig
from evo_creatures.fitness import always_survives
from evo_creatures.genome import Genome, make_gene

BIAS = 5
MOVE_X = 0x80
MOVE_Y = 0x81


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def small_config():
    return SimulationConfig(
        pool_size=20,
        population_size=40,
        genome_length=8,
        iterations_per_generation=30,
        generations=3,
        world_width=40,
        world_height=40,
        random_seed=7,
        fitness_predicate=always_survives,
    )


@pytest.fixture
def walker():
    """Factory for genomes whose only live connections are BIAS -> MOVE_X/MOVE_Y."""
    def make(length=8, wx=0, wy=0):
        genes = [make_gene(BIAS, MOVE_X, wx), make_gene(BIAS, MOVE_Y, wy)]
        genes += [make_gene(0, 0, 0)] * (length - len(genes))
        return Genome(genes)
    return make
