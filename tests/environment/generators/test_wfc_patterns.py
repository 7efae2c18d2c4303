"""Tests for chunk extraction and adjacency constraints."""

from __future__ import annotations

from random import Random

import pytest

from burrow.environment.generators import BSPInteriorBuilder
from burrow.environment.generators.wfc import (
    DIRECTIONS,
    OPPOSITE_DIR,
    MapChunk,
    build_patterns,
    is_compatible,
    patterns_to_constraints,
)
from burrow.environment.generators.wfc.patterns import compute_exits
from burrow.environment.map import Grid
from burrow.environment.tile_types import TileKind

F = TileKind.FLOOR.value
W = TileKind.WALL.value


def chunk_from_rows(rows: list[str]) -> MapChunk:
    pattern = tuple(F if char == "." else W for row in rows for char in row)
    return patterns_to_constraints([pattern], len(rows))[0]


class TestBuildPatterns:
    def test_open_chunk_has_exits_everywhere(self) -> None:
        grid = Grid(8, 8, fill=TileKind.FLOOR)
        patterns = build_patterns(grid, 8)
        assert len(patterns) == 1

        chunk = patterns_to_constraints(patterns, 8)[0]
        assert chunk.has_exits
        for direction in DIRECTIONS:
            assert chunk.exits[direction] == [True] * 8

    def test_partial_strips_are_ignored(self) -> None:
        grid = Grid(10, 9)
        patterns = build_patterns(grid, 4, dedupe=False)
        assert len(patterns) == 2 * 2
        assert all(len(p) == 16 for p in patterns)

    def test_row_major_chunk_order(self) -> None:
        grid = Grid(4, 2)
        grid[2, 0] = TileKind.FLOOR
        patterns = build_patterns(grid, 2, dedupe=False)
        assert patterns == [(W, W, W, W), (F, W, W, W)]

    def test_flips_add_mirror_images(self) -> None:
        grid = Grid(2, 2)
        grid[0, 0] = TileKind.FLOOR
        patterns = build_patterns(grid, 2, include_flips=True, dedupe=False)
        assert patterns == [
            (F, W, W, W),
            (W, F, W, W),
            (W, W, F, W),
            (W, W, W, F),
        ]

    def test_dedupe_removes_repeats(self) -> None:
        grid = Grid(16, 8)
        assert len(build_patterns(grid, 4, dedupe=False)) == 8
        assert build_patterns(grid, 4) == [tuple([W] * 16)]

    def test_dedupe_is_idempotent(self) -> None:
        builder = BSPInteriorBuilder(1, Random(3))
        builder.build()
        grid = builder.get_map()

        first = build_patterns(grid, 8, include_flips=True, dedupe=True)
        second = build_patterns(grid, 8, include_flips=True, dedupe=True)
        assert len(first) == len(set(first))
        assert set(first) == set(second)

    @pytest.mark.parametrize("chunk_size", [0, -2])
    def test_rejects_bad_chunk_size(self, chunk_size: int) -> None:
        with pytest.raises(ValueError):
            build_patterns(Grid(8, 8), chunk_size)

    def test_rejects_chunk_larger_than_grid(self) -> None:
        with pytest.raises(ValueError):
            build_patterns(Grid(8, 8), 9)


class TestExits:
    def test_exit_sides(self) -> None:
        exits = compute_exits(
            chunk_from_rows(["#.#", "..#", "###"]).pattern, 3
        )
        assert exits["N"] == [False, True, False]
        assert exits["E"] == [False, False, False]
        assert exits["S"] == [False, False, False]
        assert exits["W"] == [False, True, False]

    def test_closed_chunk_has_no_exits(self) -> None:
        chunk = chunk_from_rows(["###", "#.#", "###"])
        assert not chunk.has_exits

    def test_pattern_length_must_match(self) -> None:
        with pytest.raises(ValueError):
            compute_exits((W, W, W), 2)


class TestCompatibility:
    def test_matching_openings_connect(self) -> None:
        a = chunk_from_rows(["###", "#..", "###"])
        b = chunk_from_rows(["###", "..#", "###"])
        assert is_compatible(a, b, "E")
        assert is_compatible(b, a, "W")

    def test_misaligned_openings_conflict(self) -> None:
        a = chunk_from_rows(["#..", "###", "###"])
        b = chunk_from_rows(["###", "###", ".##"])
        assert not is_compatible(a, b, "E")

    def test_closed_side_is_a_wildcard(self) -> None:
        a = chunk_from_rows(["###", "#..", "###"])
        closed = chunk_from_rows(["###", "###", "###"])
        assert is_compatible(a, closed, "E")
        assert is_compatible(closed, a, "W")

    def test_constraint_lists_match_pairwise_rule(self) -> None:
        builder = BSPInteriorBuilder(1, Random(6))
        builder.build()
        chunks = patterns_to_constraints(
            build_patterns(builder.get_map(), 8, include_flips=True), 8
        )

        for a in chunks:
            for direction in DIRECTIONS:
                expected = [
                    j for j, b in enumerate(chunks) if is_compatible(a, b, direction)
                ]
                assert a.compatible_with[direction] == expected

    def test_constraint_lists_are_symmetric(self) -> None:
        builder = BSPInteriorBuilder(1, Random(6))
        builder.build()
        chunks = patterns_to_constraints(
            build_patterns(builder.get_map(), 8, include_flips=True), 8
        )

        for i, a in enumerate(chunks):
            for direction in DIRECTIONS:
                for j in a.compatible_with[direction]:
                    assert i in chunks[j].compatible_with[OPPOSITE_DIR[direction]]

    def test_empty_pattern_list(self) -> None:
        assert patterns_to_constraints([], 8) == []
