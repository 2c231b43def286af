"""Output module for exporting generated dungeons.

This module provides:
- VoxelMap, an in-memory voxel sink
- JSON export of the dungeon layout and spawn metadata
- JSON export of written voxels
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from voxdungeon.config import DungeonMapSpec
from voxdungeon.generator import DungeonMeta, GenerationResult
from voxdungeon.lattice import Point
from voxdungeon.room import Voxel


@dataclass
class VoxelMap:
    """Dict-backed voxel sink keeping the last voxel written at each point."""

    voxels: dict[Point, Voxel] = field(default_factory=dict)
    writes: int = 0

    def encode_voxel(self, point: Point, data: Voxel) -> None:
        self.voxels[point] = data
        self.writes += 1

    def get(self, point: Point) -> Voxel | None:
        return self.voxels.get(point)

    def count_by_type(self) -> dict[int, int]:
        """Number of stored voxels per voxel type."""
        return dict(Counter(v.voxel_type for v in self.voxels.values()))

    def __len__(self) -> int:
        return len(self.voxels)


def meta_to_dict(meta: DungeonMeta) -> dict[str, Any]:
    return {
        "spawn_area": {
            "valid_spawn_points": [
                list(p.as_tuple()) for p in meta.spawn_area.valid_spawn_points
            ]
        }
    }


def dungeon_to_dict(result: GenerationResult, config: DungeonMapSpec) -> dict[str, Any]:
    """Convert a generation result to a JSON-serializable dictionary.

    Args:
        result: The generation result to export
        config: Configuration the dungeon was generated from

    Returns:
        Dictionary with seed, config, meta, main path, rooms and doors.
        Rooms are sorted by index and doors by room pair for stable output.
    """
    return {
        "seed": list(config.seed),
        "config": config.to_dict(),
        "attempts": result.attempts,
        "meta": meta_to_dict(result.meta),
        "main_path": list(result.main_path),
        "rooms": [
            {"id": i, **room.to_dict()} for i, room in sorted(result.rooms.items())
        ],
        "doors": [
            {"rooms": [i, j], **door.to_dict()}
            for (i, j), door in sorted(result.doors.items())
        ],
        "warnings": list(result.validation.warnings),
    }


def export_json(
    result: GenerationResult, config: DungeonMapSpec, output_path: Path
) -> None:
    """Export the dungeon layout to a JSON file.

    Args:
        result: The generation result to export
        config: Configuration the dungeon was generated from
        output_path: Path to write the JSON file
    """
    data = dungeon_to_dict(result, config)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_voxels(voxels: VoxelMap, output_path: Path) -> None:
    """Export voxels as a JSON list of ``[x, y, z, distance, type]`` rows.

    Rows are sorted by point so the file is stable across runs.
    """
    rows = [
        [p.x, p.y, p.z, v.distance, v.voxel_type]
        for p, v in sorted(voxels.voxels.items(), key=lambda item: item[0].as_tuple())
    ]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(rows, f)
