"""voxdungeon - procedural dungeon layouts on a 3D voxel lattice."""

__version__ = "0.1.0"

from voxdungeon.config import (
    DungeonMapSpec,
    RoomDistributionSpec,
    RoomGraphSpec,
    load_config,
)
from voxdungeon.extent import resolve_extent_overlaps
from voxdungeon.generator import (
    MAX_GENERATE_TRIES,
    DungeonMeta,
    GenerationError,
    GenerationResult,
    generate,
    generate_with_retry,
    try_generate,
)
from voxdungeon.graph import (
    largest_connected_subgraph,
    longest_path_in_tree,
    prune_outer_nodes_to_reach_size,
)
from voxdungeon.lattice import Direction, Extent, Point
from voxdungeon.output import VoxelMap, dungeon_to_dict, export_json, export_voxels
from voxdungeon.room import EMPTY_VOXEL, FLOOR_VOXEL, SpawnArea, Voxel, VoxelEncoder
from voxdungeon.sampling import (
    LatticeNormalDistSpec,
    LatticeUniformDistSpec,
    NormalDistSpec,
    seeded_rng,
)
from voxdungeon.symmetric_map import SymmetricMap
from voxdungeon.validator import ValidationResult, validate_dungeon

__all__ = [
    # Config
    "DungeonMapSpec",
    "RoomDistributionSpec",
    "RoomGraphSpec",
    "load_config",
    # Lattice
    "Direction",
    "Extent",
    "Point",
    "resolve_extent_overlaps",
    # Sampling
    "LatticeNormalDistSpec",
    "LatticeUniformDistSpec",
    "NormalDistSpec",
    "seeded_rng",
    # Graph
    "SymmetricMap",
    "largest_connected_subgraph",
    "longest_path_in_tree",
    "prune_outer_nodes_to_reach_size",
    # Rooms and voxels
    "EMPTY_VOXEL",
    "FLOOR_VOXEL",
    "SpawnArea",
    "Voxel",
    "VoxelEncoder",
    # Generator
    "MAX_GENERATE_TRIES",
    "DungeonMeta",
    "GenerationError",
    "GenerationResult",
    "generate",
    "generate_with_retry",
    "try_generate",
    # Validator
    "ValidationResult",
    "validate_dungeon",
    # Output
    "VoxelMap",
    "dungeon_to_dict",
    "export_json",
    "export_voxels",
]
