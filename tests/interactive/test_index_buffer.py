"""interactive.gl.index_buffer の `build_line_indices` / `build_appended_line_indices` をテスト。"""

from __future__ import annotations

import numpy as np

from spiro.core.surface import PathSurface
from spiro.interactive.gl.index_buffer import (
    PRIMITIVE_RESTART_INDEX,
    build_appended_line_indices,
    build_line_indices,
)


def test_build_line_indices_empty() -> None:
    offsets = np.array([0], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.dtype == np.uint32
    assert indices.size == 0


def test_build_line_indices_single_polyline() -> None:
    offsets = np.array([0, 3], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.dtype == np.uint32
    assert indices.tolist() == [0, 1, 2]


def test_build_line_indices_multiple_polylines_with_restart() -> None:
    offsets = np.array([0, 3, 5], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.tolist() == [0, 1, 2, PRIMITIVE_RESTART_INDEX, 3, 4]


def test_build_line_indices_skips_short_polylines() -> None:
    # [0, 1) は 1 頂点なので線にならず、restart も挟まない。
    offsets = np.array([0, 1, 4], dtype=np.int32)
    assert build_line_indices(offsets).tolist() == [1, 2, 3]


def test_indices_for_surface_with_two_subpaths() -> None:
    surface = PathSurface(500, 500)
    surface.move_to(0.0, 0.0)
    surface.line_to(1.0, 1.0)
    surface.move_to(2.0, 2.0)
    surface.line_to(3.0, 3.0)
    surface.line_to(4.0, 4.0)
    surface.stroke()

    _coords, offsets = surface.realize()
    indices = build_line_indices(offsets)

    assert indices.tolist() == [0, 1, PRIMITIVE_RESTART_INDEX, 2, 3, 4]


def test_appended_indices_extend_the_last_polyline() -> None:
    previous = np.array([0, 2, 5], dtype=np.int32)
    current = np.array([0, 2, 8], dtype=np.int32)

    tail = build_appended_line_indices(previous, current)

    assert tail is not None
    assert tail.dtype == np.uint32
    assert tail.tolist() == [5, 6, 7]
    joined = np.concatenate([build_line_indices(previous), tail])
    assert joined.tolist() == build_line_indices(current).tolist()


def test_appended_indices_are_empty_when_nothing_changed() -> None:
    offsets = np.array([0, 4], dtype=np.int32)
    tail = build_appended_line_indices(offsets, offsets)
    assert tail is not None
    assert tail.size == 0


def test_appended_indices_require_a_full_rebuild_otherwise() -> None:
    # 空 → 1 本目
    assert build_appended_line_indices(np.array([0]), np.array([0, 2])) is None
    # 1 頂点だった折れ線が線になる（restart の要否が変わる）
    assert build_appended_line_indices(np.array([0, 3, 4]), np.array([0, 3, 6])) is None
    # サブパスが増える
    assert build_appended_line_indices(np.array([0, 3]), np.array([0, 3, 5])) is None
    # 別のサーフェス（縮んだ）
    assert build_appended_line_indices(np.array([0, 9]), np.array([0, 4])) is None


def test_incremental_indices_follow_ticks_on_a_surface() -> None:
    surface = PathSurface(500, 500)
    indices = np.zeros((0,), dtype=np.uint32)
    previous = np.zeros((1,), dtype=np.int32)
    for i in range(20):
        surface.line_to(float(i), float(i))
        surface.stroke()
        _coords, offsets = surface.realize()
        tail = build_appended_line_indices(previous, offsets)
        indices = build_line_indices(offsets) if tail is None else np.concatenate([indices, tail])
        previous = offsets

    assert indices.tolist() == list(range(20))
