"""Random sampling of lattice points and boxes.

Every function takes the random source explicitly. Generation is only
reproducible if a single ``random.Random`` is threaded through all calls in
a fixed order.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from voxdungeon.lattice import Extent, Point

SEED_WORDS = 4
_WORD_MAX = 2**32 - 1


def seeded_rng(seed: tuple[int, ...] | list[int]) -> random.Random:
    """Create the generation rng from four 32-bit seed words."""
    if len(seed) != SEED_WORDS:
        raise ValueError(f"seed must have {SEED_WORDS} words, got {len(seed)}")
    folded = 0
    for i, word in enumerate(seed):
        if not 0 <= word <= _WORD_MAX:
            raise ValueError(f"seed word {i} out of 32-bit range: {word}")
        folded |= word << (32 * i)
    return random.Random(folded)


class PointDistribution(Protocol):
    """Anything that can draw a lattice point from an rng."""

    def sample(self, rng: random.Random) -> Point: ...


@dataclass
class NormalDistSpec:
    """Normal distribution parameters."""

    mean: float = 0.0
    std_dev: float = 1.0

    def __post_init__(self) -> None:
        if self.std_dev < 0:
            raise ValueError(f"std_dev must be >= 0, got {self.std_dev}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NormalDistSpec:
        return cls(
            mean=float(data.get("mean", 0.0)),
            std_dev=float(data.get("std_dev", 1.0)),
        )

    def to_dict(self) -> dict[str, float]:
        return {"mean": self.mean, "std_dev": self.std_dev}


@dataclass
class LatticeNormalDist:
    """Independent normal per axis, rounded to the nearest integer."""

    x: NormalDistSpec
    y: NormalDistSpec
    z: NormalDistSpec

    def sample(self, rng: random.Random) -> Point:
        return Point(
            round(rng.gauss(self.x.mean, self.x.std_dev)),
            round(rng.gauss(self.y.mean, self.y.std_dev)),
            round(rng.gauss(self.z.mean, self.z.std_dev)),
        )


@dataclass
class LatticeNormalDistSpec:
    """Per-axis normal distribution configuration."""

    x: NormalDistSpec = field(default_factory=NormalDistSpec)
    y: NormalDistSpec = field(default_factory=NormalDistSpec)
    z: NormalDistSpec = field(default_factory=NormalDistSpec)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LatticeNormalDistSpec:
        return cls(
            x=NormalDistSpec.from_dict(data.get("x", {})),
            y=NormalDistSpec.from_dict(data.get("y", {})),
            z=NormalDistSpec.from_dict(data.get("z", {})),
        )

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {"x": self.x.to_dict(), "y": self.y.to_dict(), "z": self.z.to_dict()}

    def make(self) -> LatticeNormalDist:
        return LatticeNormalDist(x=self.x, y=self.y, z=self.z)


@dataclass
class LatticeUniformDist:
    """Independent inclusive uniform integer per axis."""

    x: tuple[int, int]
    y: tuple[int, int]
    z: tuple[int, int]

    def sample(self, rng: random.Random) -> Point:
        return Point(
            rng.randint(*self.x),
            rng.randint(*self.y),
            rng.randint(*self.z),
        )


def _parse_range(value: Any, name: str) -> tuple[int, int]:
    lo, hi = value
    if lo > hi:
        raise ValueError(f"{name} range is inverted: ({lo}, {hi})")
    return (int(lo), int(hi))


@dataclass
class LatticeUniformDistSpec:
    """Per-axis inclusive integer ranges."""

    x: tuple[int, int] = (0, 0)
    y: tuple[int, int] = (0, 0)
    z: tuple[int, int] = (0, 0)

    def __post_init__(self) -> None:
        self.x = _parse_range(self.x, "x")
        self.y = _parse_range(self.y, "y")
        self.z = _parse_range(self.z, "z")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LatticeUniformDistSpec:
        return cls(
            x=tuple(data.get("x", (0, 0))),  # type: ignore[arg-type]
            y=tuple(data.get("y", (0, 0))),  # type: ignore[arg-type]
            z=tuple(data.get("z", (0, 0))),  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, list[int]]:
        return {"x": list(self.x), "y": list(self.y), "z": list(self.z)}

    def make(self) -> LatticeUniformDist:
        return LatticeUniformDist(x=self.x, y=self.y, z=self.z)


def sample_range(rng: random.Random, lo: int, hi: int) -> tuple[int, int]:
    """Return a random ordered sub-range of ``[lo, hi]`` (both inclusive)."""
    c1 = rng.randint(lo, hi)
    c2 = rng.randint(lo, hi)
    return (c2, c1) if c1 > c2 else (c1, c2)


def sample_extents(
    num_extents: int,
    predicate: Callable[[Extent], bool],
    location_distr: PointDistribution,
    size_distr: PointDistribution,
    rng: random.Random,
) -> list[Extent]:
    """Rejection-sample `num_extents` boxes accepted by `predicate`.

    There is no cap on attempts: a predicate the distributions can never
    satisfy loops forever.
    """
    extents: list[Extent] = []
    while len(extents) < num_extents:
        loc = location_distr.sample(rng)
        size = size_distr.sample(rng)
        extent = Extent.from_min_and_local_supremum(loc, size)
        if predicate(extent):
            extents.append(extent)
    return extents
