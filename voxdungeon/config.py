"""Configuration parsing for voxdungeon."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from voxdungeon.lattice import Extent
from voxdungeon.sampling import (
    SEED_WORDS,
    LatticeNormalDistSpec,
    LatticeUniformDistSpec,
    NormalDistSpec,
)

# Use tomllib (Python 3.11+) with fallback to tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError as e:
        raise ImportError(
            "tomli is required for Python < 3.11. Install with: pip install tomli"
        ) from e


def _default_location() -> LatticeUniformDistSpec:
    return LatticeUniformDistSpec(x=(0, 16), y=(0, 16), z=(0, 16))


def _default_size() -> LatticeNormalDistSpec:
    return LatticeNormalDistSpec(
        x=NormalDistSpec(mean=6.0, std_dev=1.5),
        y=NormalDistSpec(mean=6.0, std_dev=1.5),
        z=NormalDistSpec(mean=6.0, std_dev=1.5),
    )


@dataclass
class RoomGraphSpec:
    """Room count and main path length targets."""

    num_rooms: int = 5
    entrance_to_objective_path_length: int = 3


@dataclass
class RoomDistributionSpec:
    """Where room candidates are placed and how big they are."""

    location: LatticeUniformDistSpec = field(default_factory=_default_location)
    size: LatticeNormalDistSpec = field(default_factory=_default_size)


@dataclass
class DungeonMapSpec:
    """Main configuration container.

    Together with the rng built from `seed`, fully determines a generated
    dungeon.
    """

    seed: tuple[int, int, int, int] = (0, 0, 0, 0)
    room_graph: RoomGraphSpec = field(default_factory=RoomGraphSpec)
    room_dist: RoomDistributionSpec = field(default_factory=RoomDistributionSpec)
    min_room_dim: int = 4
    max_room_dim: int = 8
    min_door_dim: int = 1
    max_door_dim: int = 3

    def __post_init__(self) -> None:
        """Validate per-field values."""
        if len(self.seed) != SEED_WORDS:
            raise ValueError(f"seed must have {SEED_WORDS} words, got {len(self.seed)}")
        for word in self.seed:
            if not 0 <= word < 2**32:
                raise ValueError(f"seed words must be 32-bit unsigned, got {word}")
        self.seed = tuple(self.seed)  # type: ignore[assignment]
        for name in ("min_room_dim", "max_room_dim", "min_door_dim", "max_door_dim"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")

    def valid_room_size(self, room: Extent) -> bool:
        """True if every side of `room` lies within the room dimension bounds."""
        return all(
            self.min_room_dim <= d <= self.max_room_dim
            for d in room.local_supremum.as_tuple()
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DungeonMapSpec:
        """Create DungeonMapSpec from a dictionary (e.g., parsed TOML)."""
        run_section = data.get("run", {})
        room_graph_section = data.get("room_graph", {})
        rooms_section = data.get("rooms", {})
        doors_section = data.get("doors", {})
        room_dist_section = data.get("room_dist", {})

        location = (
            LatticeUniformDistSpec.from_dict(room_dist_section["location"])
            if "location" in room_dist_section
            else _default_location()
        )
        size = (
            LatticeNormalDistSpec.from_dict(room_dist_section["size"])
            if "size" in room_dist_section
            else _default_size()
        )

        return cls(
            seed=tuple(run_section.get("seed", (0, 0, 0, 0))),  # type: ignore[arg-type]
            room_graph=RoomGraphSpec(
                num_rooms=room_graph_section.get("num_rooms", 5),
                entrance_to_objective_path_length=room_graph_section.get(
                    "entrance_to_objective_path_length", 3
                ),
            ),
            room_dist=RoomDistributionSpec(location=location, size=size),
            min_room_dim=rooms_section.get("min_dim", 4),
            max_room_dim=rooms_section.get("max_dim", 8),
            min_door_dim=doors_section.get("min_dim", 1),
            max_door_dim=doors_section.get("max_dim", 3),
        )

    @classmethod
    def from_toml(cls, path: str | Path) -> DungeonMapSpec:
        """Load configuration from a TOML file."""
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the same layout `from_dict` reads."""
        return {
            "run": {"seed": list(self.seed)},
            "room_graph": {
                "num_rooms": self.room_graph.num_rooms,
                "entrance_to_objective_path_length": (
                    self.room_graph.entrance_to_objective_path_length
                ),
            },
            "rooms": {"min_dim": self.min_room_dim, "max_dim": self.max_room_dim},
            "doors": {"min_dim": self.min_door_dim, "max_dim": self.max_door_dim},
            "room_dist": {
                "location": self.room_dist.location.to_dict(),
                "size": self.room_dist.size.to_dict(),
            },
        }


def load_config(path: str | Path) -> DungeonMapSpec:
    """Load configuration from a TOML file.

    This is a convenience function that wraps DungeonMapSpec.from_toml().

    Args:
        path: Path to the TOML configuration file.

    Returns:
        Parsed DungeonMapSpec object.
    """
    return DungeonMapSpec.from_toml(path)
