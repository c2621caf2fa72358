"""
Genes, genomes and gene pools.

A gene is one 32-bit connection of a creature's brain:

    bits 31..24  source byte       (bit 7: 0 = sensor, 1 = internal neuron)
    bits 23..16  destination byte  (bit 7: 0 = internal neuron, 1 = action)
    bits 15..0   signed weight

A genome is a fixed-length, read-only run of genes. Every random draw goes
through the ``np.random.Generator`` handed in by the caller.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional
import numpy as np

from .exceptions import ConfigurationError, GenomeError

GENE_BITS = 32
GENE_SPACE = 1 << GENE_BITS
MUTATION_MODES = ("resample", "bitflip")

_KIND_BIT = 0x80
_INDEX_MASK = 0x7F


class NeuronKind(Enum):
    INPUT = "input"
    INTERNAL = "internal"
    OUTPUT = "output"


# ---------- single genes ----------

def make_gene(source: int, destination: int, weight: int) -> int:
    if not 0 <= source < 256 or not 0 <= destination < 256:
        raise GenomeError(f"neuron bytes out of range: {source}, {destination}")
    if not -0x8000 <= weight < 0x8000:
        raise GenomeError(f"weight {weight} does not fit in 16 bits")
    return (source << 24) | (destination << 16) | (weight & 0xFFFF)


def gene_source(gene: int) -> int:
    return (int(gene) >> 24) & 0xFF


def gene_destination(gene: int) -> int:
    return (int(gene) >> 16) & 0xFF


def gene_weight(gene: int) -> int:
    w = int(gene) & 0xFFFF
    return w - 0x10000 if w & 0x8000 else w


def source_kind(gene: int) -> NeuronKind:
    return NeuronKind.INTERNAL if gene_source(gene) & _KIND_BIT else NeuronKind.INPUT


def destination_kind(gene: int) -> NeuronKind:
    return NeuronKind.OUTPUT if gene_destination(gene) & _KIND_BIT else NeuronKind.INTERNAL


def neuron_index(raw: int, count: int) -> int:
    """Map a source/destination byte onto one of ``count`` neurons of its kind."""
    return (raw & _INDEX_MASK) % count


def format_gene(gene: int) -> str:
    """Hex form ``SSDDWWWW``, e.g. ``817FFFFF`` for (0x81, 0x7F, -1)."""
    return f"{int(gene):08X}"


def flip_bit(gene: int, bit: int) -> int:
    if not 0 <= bit < GENE_BITS:
        raise GenomeError(f"bit index {bit} outside 0..{GENE_BITS - 1}")
    return int(gene) ^ (1 << bit)


# ---------- genomes ----------

@dataclass(frozen=True, eq=False)
class Genome:
    genes: np.ndarray

    def __post_init__(self):
        if isinstance(self.genes, np.ndarray) and self.genes.dtype == np.uint32:
            genes = self.genes.copy()
        else:
            raw = self.genes if isinstance(self.genes, np.ndarray) else list(self.genes)
            shape = raw.shape if isinstance(raw, np.ndarray) else (len(raw),)
            try:
                values = [int(g) for g in (raw.ravel() if isinstance(raw, np.ndarray) else raw)]
            except TypeError as e:
                raise GenomeError("genes must be plain integers") from e
            bad = [g for g in values if not 0 <= g < GENE_SPACE]
            if bad:
                raise GenomeError(f"gene values outside 0..{GENE_SPACE - 1}: {bad[:3]}")
            genes = np.array(values, dtype=np.uint32).reshape(shape)
        if genes.ndim != 1 or genes.size == 0:
            raise GenomeError(f"genome must be a non-empty 1-D gene sequence, got shape {genes.shape}")
        genes.setflags(write=False)
        object.__setattr__(self, "genes", genes)
        object.__setattr__(self, "_hash", hash(genes.tobytes()))

    def __len__(self) -> int:
        return int(self.genes.size)

    def __iter__(self) -> Iterator[int]:
        return (int(g) for g in self.genes)

    def __getitem__(self, i: int) -> int:
        return int(self.genes[i])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return np.array_equal(self.genes, other.genes)

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return " ".join(format_gene(g) for g in self)


def validate_genome(genome: Genome, length: int) -> None:
    if len(genome) != length:
        raise GenomeError(f"genome has {len(genome)} genes, expected {length}")


def random_genome(length: int, rng: np.random.Generator) -> Genome:
    if length <= 0:
        raise ConfigurationError(f"genome length must be positive, got {length}")
    return Genome(rng.integers(0, GENE_SPACE, size=length, dtype=np.uint32))


def check_mutation(rate: float, mode: str = "resample") -> None:
    if not 0.0 <= rate <= 1.0:
        raise ConfigurationError(f"mutation rate must be within [0, 1], got {rate}")
    if mode not in MUTATION_MODES:
        raise ConfigurationError(f"unknown mutation mode {mode!r}; expected one of {MUTATION_MODES}")


def mutate(g: Genome, rng: np.random.Generator, rate: float, mode: str = "resample") -> Genome:
    """Return a copy of ``g`` where each gene, with probability ``rate``, is
    redrawn ("resample") or has one random bit flipped ("bitflip")."""
    check_mutation(rate, mode)
    v = g.genes.copy()
    mask = rng.random(v.shape) < rate
    n = int(mask.sum())
    if n:
        if mode == "resample":
            v[mask] = rng.integers(0, GENE_SPACE, size=n, dtype=np.uint32)
        else:
            bits = rng.integers(0, GENE_BITS, size=n, dtype=np.uint32)
            v[mask] ^= np.left_shift(np.uint32(1), bits)
    return Genome(v)


# ---------- gene pools ----------

class GenePool:
    """
    Immutable breeding population. All genomes share one length; an empty
    pool cannot be built (a generation without survivors has no pool at all).
    """

    def __init__(self, genomes: Iterable[Genome], genome_length: Optional[int] = None):
        genomes = tuple(genomes)
        if not genomes:
            raise ConfigurationError("a gene pool needs at least one genome")
        length = len(genomes[0]) if genome_length is None else genome_length
        for g in genomes:
            validate_genome(g, length)
        self._genomes = genomes
        self.genome_length = length

    @classmethod
    def random(cls, size: int, length: int, rng: np.random.Generator) -> "GenePool":
        if size <= 0:
            raise ConfigurationError(f"pool size must be positive, got {size}")
        return cls([random_genome(length, rng) for _ in range(size)], length)

    def sample(self, rng: np.random.Generator, k: int) -> List[Genome]:
        """Draw ``k`` genomes uniformly, independently, with replacement."""
        idx = rng.integers(0, len(self._genomes), size=k)
        return [self._genomes[i] for i in idx]

    def __len__(self) -> int:
        return len(self._genomes)

    def __iter__(self) -> Iterator[Genome]:
        return iter(self._genomes)

    def __getitem__(self, i: int) -> Genome:
        return self._genomes[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, GenePool):
            return NotImplemented
        return self._genomes == other._genomes

    def __hash__(self) -> int:
        return hash(self._genomes)

    def __repr__(self) -> str:
        return f"GenePool(size={len(self)}, genome_length={self.genome_length})"
