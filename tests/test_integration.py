"""Integration tests for the full generation pipeline and CLI."""

import json

import pytest

from voxdungeon import DungeonMapSpec, generate_with_retry
from voxdungeon.main import main
from voxdungeon.output import VoxelMap, dungeon_to_dict


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("""
[run]
seed = [3, 1, 4, 1]

[room_graph]
num_rooms = 4
entrance_to_objective_path_length = 3
""")
    return path


class TestFullPipeline:
    """End-to-end tests for generation and export."""

    def test_generate_validate_export(self, config_file):
        config = DungeonMapSpec.from_toml(config_file)
        result = generate_with_retry(config, VoxelMap())
        assert (
            result.validation.is_valid
        ), f"Validation failed: {result.validation.errors}"

        data = dungeon_to_dict(result, config)
        assert data["seed"] == [3, 1, 4, 1]
        room_ids = {room["id"] for room in data["rooms"]}
        assert set(data["main_path"]) <= room_ids
        for door in data["doors"]:
            assert set(door["rooms"]) <= room_ids

    @pytest.mark.parametrize("seed", [(0, 0, 0, 1), (5, 5, 5, 5), (2**32 - 1, 0, 7, 9)])
    def test_several_seeds(self, seed):
        result = generate_with_retry(DungeonMapSpec(seed=seed), VoxelMap())
        assert result.validation.is_valid
        assert len(result.rooms) >= 5


class TestCli:
    """Tests for the voxdungeon command."""

    def test_writes_dungeon_json(self, config_file, tmp_path, capsys):
        out_dir = tmp_path / "out"
        assert main([str(config_file), "-o", str(out_dir)]) == 0

        with (out_dir / "dungeon.json").open() as f:
            data = json.load(f)
        assert data["seed"] == [3, 1, 4, 1]
        assert not (out_dir / "voxels.json").exists()
        assert "Generated dungeon with seed [3, 1, 4, 1]" in capsys.readouterr().out

    def test_seed_override_and_voxels(self, config_file, tmp_path):
        out_dir = tmp_path / "out"
        code = main(
            [str(config_file), "-o", str(out_dir), "--seed", "9", "8", "7", "6", "--voxels"]
        )
        assert code == 0
        with (out_dir / "dungeon.json").open() as f:
            assert json.load(f)["seed"] == [9, 8, 7, 6]
        with (out_dir / "voxels.json").open() as f:
            rows = json.load(f)
        assert rows
        assert all(len(row) == 5 for row in rows)

    def test_defaults_without_config(self, tmp_path):
        assert main(["-o", str(tmp_path)]) == 0
        assert (tmp_path / "dungeon.json").exists()

    def test_missing_config(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.toml")]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_bad_seed(self, tmp_path, capsys):
        code = main(["-o", str(tmp_path), "--seed", "1", "2", "3", "-4"])
        assert code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_infeasible_config(self, tmp_path, capsys):
        path = tmp_path / "config.toml"
        path.write_text("""
[room_graph]
num_rooms = 2
entrance_to_objective_path_length = 50
""")
        code = main([str(path), "-o", str(tmp_path / "out"), "--max-attempts", "5"])
        assert code == 1
        assert "after 5 attempts" in capsys.readouterr().err
        assert not (tmp_path / "out" / "dungeon.json").exists()
