# どこで: `src/spiro/interactive/gl/index_buffer.py`。
# 何を: サーフェスの offsets から GL_LINE_STRIP 用インデックス配列を生成する。
# なぜ: インデックス生成を純粋関数として切り出し、テストしやすくするため。

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[attr-defined]

# サブパスの区切り（glPrimitiveRestartIndex）。
PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF


def build_line_indices(offsets: np.ndarray) -> np.ndarray:
    """offsets から GL_LINE_STRIP 用インデックス配列を生成する。

    Notes
    -----
    複数ポリライン（サブパス）を 1 draw call で描くため、間に PRIMITIVE_RESTART_INDEX を挿入する。
    2 頂点未満のポリラインは線にならないので読み飛ばす。
    """

    offsets_i32 = np.ascontiguousarray(offsets, dtype=np.int32)
    if offsets_i32.size < 2:
        return np.zeros((0,), dtype=np.uint32)
    return _build_line_strip_indices_numba(offsets_i32, np.uint32(PRIMITIVE_RESTART_INDEX))


def build_appended_line_indices(
    previous_offsets: np.ndarray, offsets: np.ndarray
) -> np.ndarray | None:
    """最後の折れ線が伸びただけなら、伸びた分のインデックスを返す。

    `build_line_indices(previous_offsets)` の末尾にこの戻り値を連結すると
    `build_line_indices(offsets)` と一致する。それ以外の変化（サブパス追加、縮小、
    直前まで描画対象外だった折れ線が線になった等）では None を返すので、全体を作り直すこと。
    """

    prev = np.asarray(previous_offsets)
    cur = np.asarray(offsets)
    if prev.size < 2 or prev.size != cur.size:
        return None
    if not np.array_equal(prev[:-1], cur[:-1]):
        return None
    old_end = int(prev[-1])
    new_end = int(cur[-1])
    if new_end < old_end or old_end - int(prev[-2]) < 2:
        return None
    return np.arange(old_end, new_end, dtype=np.uint32)


@njit(cache=True)  # type: ignore[misc]
def _build_line_strip_indices_numba(
    offsets: np.ndarray,
    restart_index: np.uint32,
) -> np.ndarray:
    """GL_LINE_STRIP + primitive restart 用の indices を生成する（Numba 版）。"""
    n = offsets.shape[0]

    total_vertices = 0
    polyline_count = 0
    for i in range(n - 1):
        length = offsets[i + 1] - offsets[i]
        if length >= 2:
            total_vertices += length
            polyline_count += 1

    if polyline_count == 0:
        return np.empty((0,), dtype=np.uint32)

    out = np.empty((total_vertices + (polyline_count - 1),), dtype=np.uint32)

    cursor = 0
    emitted_any = False
    for i in range(n - 1):
        start = offsets[i]
        length = offsets[i + 1] - start
        if length < 2:
            continue

        if emitted_any:
            out[cursor] = restart_index
            cursor += 1

        for j in range(length):
            out[cursor] = start + j
            cursor += 1

        emitted_any = True

    return out
