"""
Exception hierarchy for the evolution core.

Configuration problems are fatal and raised as early as possible. A generation
in which nobody survives is reported as a result status; it only becomes an
exception when the loop is told to abort on it.
"""


class EvolutionError(Exception):
    """Root of all evo_creatures exceptions."""


class ConfigurationError(EvolutionError):
    """Invalid run configuration (sizes, rates, world bounds, policies)."""


class GenomeError(ConfigurationError):
    """Malformed genome: wrong length or an impossible gene operation."""


class SimulationError(EvolutionError):
    """The simulation was driven in a way it does not support."""


class DegenerateGenerationError(SimulationError):
    """A generation ended with zero survivors, so there is nothing to breed from."""

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"generation {result.index} ended with no survivors "
            f"({len(result.survivor_mask)} creatures evaluated)"
        )
