"""
Entry: run a short evolution and print a report.
"""
import logging

from evo_creatures.brain import describe_gene
from evo_creatures.config import SimulationConfig
from evo_creatures.runner import EvolutionLoop

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = SimulationConfig(generations=5, iterations_per_generation=300, on_extinction="reseed")
    loop = EvolutionLoop(cfg)
    last = None
    for last in loop.run():
        pass
    print("Survivors per generation:", [n for _, n in loop.history])
    if last is not None and last.gene_pool is not None:
        print("A genome from the final pool:")
        for gene in last.gene_pool[0]:
            print("  ", describe_gene(gene, cfg.num_internal))
