"""
Viewer: draw generation results with matplotlib.

Consumes GenerationResult objects only; nothing in the simulation imports
this module. Survivors are drawn green, the rest grey, with the survival box
outlined when one is given.
"""
from typing import Optional, Sequence, Tuple
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from matplotlib.ticker import MaxNLocator

from .fitness import InsideRegion
from .runner import GenerationResult
from .world import WorldConfig

ALIVE_COLOR = "#2e7d32"
DEAD_COLOR = "#90a4ae"
REGION_COLOR = "#ffab00"


def render_generation(result: GenerationResult, world_cfg: WorldConfig,
                      predicate_region: Optional[InsideRegion] = None, ax=None):
    width, height = world_cfg.width, world_cfg.height
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6 * height / width))
    else:
        fig = ax.figure

    ax.set_facecolor("#2b2b2b")
    ax.set_xlim(-0.5, width - 0.5); ax.set_ylim(-0.5, height - 0.5)  # (0, 0) bottom left
    ax.set_aspect("equal")
    ax.set_xticks([]); ax.set_yticks([])

    r = predicate_region
    if r is not None:
        ax.add_patch(Rectangle((r.x_min, r.y_min), r.x_max - r.x_min, r.y_max - r.y_min,
                               fill=False, edgecolor=REGION_COLOR, linewidth=1.2))

    pos, mask = result.positions, result.survivor_mask
    ax.scatter(pos[~mask, 0], pos[~mask, 1], s=6, c=DEAD_COLOR)
    ax.scatter(pos[mask, 0], pos[mask, 1], s=6, c=ALIVE_COLOR)
    ax.set_title(f"generation {result.index}: {result.survivor_count}/{len(mask)} survived", fontsize=9)
    return fig


def plot_survival(history: Sequence[Tuple[int, int]], population: Optional[int] = None, ax=None):
    """Survivor count per generation, as (index, survivors) pairs."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 3))
    else:
        fig = ax.figure
    gens = [g for g, _ in history]
    counts = [n for _, n in history]
    ax.plot(gens, counts, marker="o", color=ALIVE_COLOR)
    if population:
        ax.set_ylim(0, population)
    ax.xaxis.set_major_locator(MaxNLocator(integer=True))
    ax.set_xlabel("generation"); ax.set_ylabel("survivors")
    fig.tight_layout()
    return fig
