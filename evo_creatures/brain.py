"""
Brain: turns a genome into movement.

Each gene is one weighted connection. Sensors and internal neurons feed
internal neurons and the two movement actions; internal neurons get one
recurrent pass. Decoding draws no random numbers, so a creature's whole
trajectory is fixed by its genome and its spawn position.
"""
from dataclasses import dataclass
from typing import NamedTuple
import numpy as np

from .genome import (
    Genome, NeuronKind, gene_source, gene_destination, gene_weight,
    source_kind, destination_kind, neuron_index, format_gene,
)
from .exceptions import ConfigurationError

SENSORS = ("LOC_X", "LOC_Y", "AGE", "OSC", "BOUNDARY", "BIAS")
ACTIONS = ("MOVE_X", "MOVE_Y")
NUM_INPUTS = len(SENSORS)
NUM_OUTPUTS = len(ACTIONS)
MAX_INTERNAL = 127

WEIGHT_SCALE = 1.0 / 8192.0  # int16 -> [-4, 4)
OSC_PERIOD = 32


class CreatureState(NamedTuple):
    """What a creature perceives before a step."""
    x: int
    y: int
    step: int
    width: int
    height: int
    lifespan: int


class MoveVector(NamedTuple):
    dx: float
    dy: float


def sensors(state: CreatureState) -> np.ndarray:
    x, y, step, w, h, life = state
    edge = min(x, y, w - 1 - x, h - 1 - y)
    half = max(1.0, (min(w, h) - 1) / 2.0)
    return np.array([
        x / (w - 1) if w > 1 else 0.0,
        y / (h - 1) if h > 1 else 0.0,
        step / life if life > 0 else 0.0,
        np.sin(2 * np.pi * step / OSC_PERIOD),
        edge / half,
        1.0,
    ], dtype=np.float64)


def check_internal(num_internal: int) -> None:
    if not 0 <= num_internal <= MAX_INTERNAL:
        raise ConfigurationError(f"num_internal must be within 0..{MAX_INTERNAL}, got {num_internal}")


@dataclass(frozen=True, eq=False)
class Brain:
    in_int: np.ndarray   # (internal, inputs)
    int_int: np.ndarray  # (internal, internal)
    in_out: np.ndarray   # (outputs, inputs)
    int_out: np.ndarray  # (outputs, internal)

    @property
    def num_internal(self) -> int:
        return self.in_int.shape[0]

    @classmethod
    def from_genome(cls, genome: Genome, num_internal: int = 3) -> "Brain":
        check_internal(num_internal)
        in_int = np.zeros((num_internal, NUM_INPUTS))
        int_int = np.zeros((num_internal, num_internal))
        in_out = np.zeros((NUM_OUTPUTS, NUM_INPUTS))
        int_out = np.zeros((NUM_OUTPUTS, num_internal))

        for gene in genome:
            src_kind, dst_kind = source_kind(gene), destination_kind(gene)
            if num_internal == 0 and NeuronKind.INTERNAL in (src_kind, dst_kind):
                continue
            if src_kind is NeuronKind.INPUT:
                si = neuron_index(gene_source(gene), NUM_INPUTS)
                target = in_out if dst_kind is NeuronKind.OUTPUT else in_int
            else:
                si = neuron_index(gene_source(gene), num_internal)
                target = int_out if dst_kind is NeuronKind.OUTPUT else int_int
            di = neuron_index(gene_destination(gene), NUM_OUTPUTS if dst_kind is NeuronKind.OUTPUT else num_internal)
            # repeated connections accumulate
            target[di, si] += gene_weight(gene) * WEIGHT_SCALE

        return cls(in_int, int_int, in_out, int_out)

    def move(self, state: CreatureState) -> MoveVector:
        s = sensors(state)
        if self.num_internal:
            drive = self.in_int @ s
            h = np.tanh(drive)
            h = np.tanh(drive + self.int_int @ h)
            out = np.tanh(self.in_out @ s + self.int_out @ h)
        else:
            out = np.tanh(self.in_out @ s)
        return MoveVector(float(out[0]), float(out[1]))


def decode_move(genome: Genome, state: CreatureState, num_internal: int = 3) -> MoveVector:
    """Pure genome + state -> displacement in (-1, 1) on each axis."""
    return Brain.from_genome(genome, num_internal).move(state)


def describe_gene(gene: int, num_internal: int = 3) -> str:
    """Human readable connection, e.g. ``817FFFFF  N1 -> MOVE_Y  -0.000``."""
    src_kind, dst_kind = source_kind(gene), destination_kind(gene)
    if num_internal == 0 and NeuronKind.INTERNAL in (src_kind, dst_kind):
        return f"{format_gene(gene)}  (unused)"
    if src_kind is NeuronKind.INPUT:
        src = SENSORS[neuron_index(gene_source(gene), NUM_INPUTS)]
    else:
        src = f"N{neuron_index(gene_source(gene), num_internal)}"
    if dst_kind is NeuronKind.OUTPUT:
        dst = ACTIONS[neuron_index(gene_destination(gene), NUM_OUTPUTS)]
    else:
        dst = f"N{neuron_index(gene_destination(gene), num_internal)}"
    return f"{format_gene(gene)}  {src} -> {dst}  {gene_weight(gene) * WEIGHT_SCALE:+.3f}"
