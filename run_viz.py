import matplotlib.pyplot as plt

from evo_creatures.config import SimulationConfig
from evo_creatures.fitness import InsideRegion
from evo_creatures.runner import EvolutionLoop
from evo_creatures.viewer import render_generation, plot_survival

if __name__ == "__main__":
    # One frame per generation plus the survival curve.
    cfg = SimulationConfig(generations=6, iterations_per_generation=300, on_extinction="reseed")
    loop = EvolutionLoop(cfg)
    for result in loop.run():
        region = cfg.fitness_predicate if isinstance(cfg.fitness_predicate, InsideRegion) else None
        render_generation(result, cfg.world_config(), predicate_region=region)
    plot_survival(loop.history, population=cfg.population_size)
    plt.show()
