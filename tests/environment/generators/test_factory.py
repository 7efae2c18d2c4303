"""Tests for the builder registry and level orchestration."""

from __future__ import annotations

import logging
from random import Random

import pytest

from burrow.environment.generators import factory
from burrow.environment.generators.base import MapBuilder
from burrow.environment.generators.errors import MapGenerationError
from burrow.environment.generators.factory import (
    BUILDER_REGISTRY,
    GeneratedLevel,
    create_builder,
    generate_level,
    random_builder,
)
from burrow.environment.generators.simple_rooms import SimpleRoomsBuilder
from burrow.environment.generators.wfc import WaveformCollapseBuilder
from burrow.environment.map import Grid
from burrow.environment.tile_types import TileKind

EXPECTED_NAMES = {
    "simple_rooms",
    "bsp_dungeon",
    "bsp_interior",
    "cellular_automata",
    "drunkard_open_area",
    "drunkard_open_halls",
    "drunkard_winding_passages",
    "maze",
    "dla_walk_inwards",
    "dla_walk_outwards",
    "dla_central_attractor",
    "dla_insectoid",
    "voronoi_pythagoras",
    "voronoi_manhattan",
    "voronoi_chebyshev",
}


class FailingBuilder(MapBuilder):
    name = "failing"

    def _build(self) -> None:
        raise MapGenerationError("nothing fits")

    def get_regions(self):
        return {}


class TestRegistry:
    def test_registry_has_every_strategy(self) -> None:
        assert set(BUILDER_REGISTRY) == EXPECTED_NAMES

    @pytest.mark.parametrize("name", sorted(EXPECTED_NAMES))
    def test_create_builder_by_name(self, name: str) -> None:
        builder = create_builder(name, 3, Random(1), width=40, height=30)
        assert builder.name == name
        assert builder.depth == 3
        assert (builder.width, builder.height) == (40, 30)
        assert not builder.is_built

    @pytest.mark.parametrize("name", sorted(EXPECTED_NAMES))
    def test_builder_classes_are_documented(self, name: str) -> None:
        builder = create_builder(name, 1, Random(1))
        assert type(builder).__doc__

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown builder name"):
            create_builder("labyrinth", 1, Random(1))


class TestRandomBuilder:
    def test_plain_pick(self, scripted_rng) -> None:
        rng = scripted_rng([1, 2])
        builder = random_builder(1, rng)
        assert isinstance(builder, SimpleRoomsBuilder)
        assert rng.calls == [(1, len(BUILDER_REGISTRY)), (1, 3)]

    def test_wfc_wrap_on_a_one(self, scripted_rng) -> None:
        rng = scripted_rng([8, 1])
        builder = random_builder(1, rng)
        assert isinstance(builder, WaveformCollapseBuilder)
        assert builder.name == "wfc(maze)"
        assert builder.source.rng is rng

    def test_picks_last_entry(self, scripted_rng) -> None:
        rng = scripted_rng([len(BUILDER_REGISTRY), 3])
        assert random_builder(1, rng).name == "voronoi_chebyshev"

    def test_logs_selection(
        self, scripted_rng, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger_name = "burrow.environment.generators.factory"
        with caplog.at_level(logging.INFO, logger=logger_name):
            random_builder(4, scripted_rng([1, 2]))
        assert "Selected simple_rooms for depth 4" in caplog.text


class TestGenerateLevel:
    def test_generates_a_playable_level(self) -> None:
        level = generate_level(1, rng=Random(3))

        assert isinstance(level, GeneratedLevel)
        assert level.grid.count(TileKind.STAIRS_DOWN) == 1
        assert level.grid[level.start] == TileKind.FLOOR
        assert level.grid.count(TileKind.PLACEHOLDER) == 0

    def test_same_seed_same_level(self) -> None:
        a = generate_level(2, rng=Random(17))
        b = generate_level(2, rng=Random(17))
        assert a.grid.tiles.tolist() == b.grid.tiles.tolist()
        assert a.start == b.start
        assert a.regions == b.regions

    def test_uses_global_stream_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen = []

        def fake_random_builder(depth, rng, **kwargs):
            seen.append(rng)
            return SimpleRoomsBuilder(depth, Random(1), **kwargs)

        monkeypatch.setattr(factory, "random_builder", fake_random_builder)
        generate_level(1)
        assert seen[0].domain == "map.generation"

    def test_retries_after_failures(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        calls = []

        def flaky_random_builder(depth, rng, **kwargs):
            calls.append(depth)
            if len(calls) < 3:
                return FailingBuilder(depth, rng, **kwargs)
            return SimpleRoomsBuilder(depth, rng, **kwargs)

        monkeypatch.setattr(factory, "random_builder", flaky_random_builder)
        with caplog.at_level(logging.WARNING):
            level = generate_level(1, rng=Random(5))

        assert len(calls) == 3
        assert level.grid.count(TileKind.STAIRS_DOWN) == 1
        assert caplog.text.count("failed: nothing fits") == 2

    def test_raises_last_error_when_budget_runs_out(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls = []

        def failing_random_builder(depth, rng, **kwargs):
            calls.append(depth)
            return FailingBuilder(depth, rng, **kwargs)

        monkeypatch.setattr(factory, "random_builder", failing_random_builder)
        with pytest.raises(MapGenerationError, match="nothing fits"):
            generate_level(1, rng=Random(5), max_attempts=4)
        assert len(calls) == 4

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValueError):
            generate_level(1, rng=Random(5), max_attempts=0)

    def test_forwards_snapshots_and_size(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def rooms_only(depth, rng, **kwargs):
            return SimpleRoomsBuilder(depth, rng, **kwargs)

        monkeypatch.setattr(factory, "random_builder", rooms_only)
        snapshots: list[Grid] = []
        level = generate_level(
            1, rng=Random(5), on_snapshot=snapshots.append, width=60, height=40
        )
        assert snapshots
        assert (level.grid.width, level.grid.height) == (60, 40)

    def test_populates_through_spawner(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def rooms_only(depth, rng, **kwargs):
            return SimpleRoomsBuilder(depth, rng, **kwargs)

        class CountingSpawner:
            def __init__(self) -> None:
                self.areas: list[int] = []

            def spawn_region(self, area, depth, map_width):
                self.areas.append(len(area))
                return {}

        monkeypatch.setattr(factory, "random_builder", rooms_only)
        spawner = CountingSpawner()
        level = generate_level(1, rng=Random(5), spawner=spawner)
        assert len(spawner.areas) == len(level.regions)
