"""
どこで: `src/spiro/interactive/gl/line_mesh.py`。
何を: 伸び続ける折れ線を、追記型の VBO/IBO/VAO として GPU 上に保持する。
なぜ: tick ごとに増えるのは末尾の数頂点だけなので、全体を送り直さず差分だけ書き込むため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from spiro.interactive.gl.index_buffer import PRIMITIVE_RESTART_INDEX

_VERTEX_BYTES = 2 * 4
_INDEX_BYTES = 4


class LineMesh:
    """2D 頂点（`in_vert` は vec2）と LINE_STRIP 用インデックスを保持する GPU メッシュ。

    `replace()` で内容を丸ごと入れ替え、`append()` で末尾に追記する。
    容量が足りなくなったら倍の大きさのバッファへ GPU 内でコピーして移る。
    """

    def __init__(self, ctx: Any, program: Any, *, initial_reserve: int = 256 * 1024) -> None:
        self.ctx = ctx
        self.program = program
        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.ibo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._bind()

        self.vertex_count = 0
        self.index_count = 0
        self.ctx.primitive_restart = True  # type: ignore
        self.ctx.primitive_restart_index = PRIMITIVE_RESTART_INDEX  # type: ignore

    def _bind(self) -> Any:
        return self.ctx.simple_vertex_array(
            self.program, self.vbo, "in_vert", index_buffer=self.ibo
        )

    def _grown(self, buffer: Any, needed: int, *, keep: int) -> Any:
        """`needed` バイト入るバッファを返す。作り直す場合は先頭 `keep` バイトを引き継ぐ。"""

        if needed <= buffer.size:
            return buffer
        grown = self.ctx.buffer(reserve=max(needed, buffer.size * 2), dynamic=True)
        if keep > 0:
            self.ctx.copy_buffer(grown, buffer, size=keep)
        buffer.release()
        return grown

    def _reserve(self, vertex_count: int, index_count: int, *, keep: bool) -> None:
        vbo = self._grown(
            self.vbo,
            vertex_count * _VERTEX_BYTES,
            keep=self.vertex_count * _VERTEX_BYTES if keep else 0,
        )
        ibo = self._grown(
            self.ibo,
            index_count * _INDEX_BYTES,
            keep=self.index_count * _INDEX_BYTES if keep else 0,
        )
        if vbo is not self.vbo or ibo is not self.ibo:
            self.vbo = vbo
            self.ibo = ibo
            self.vao.release()
            self.vao = self._bind()

    def replace(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """メッシュ全体を `vertices` / `indices` で置き換える。"""

        vertices_f32 = np.ascontiguousarray(vertices, dtype=np.float32)
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)
        self._reserve(len(vertices_f32), len(indices_u32), keep=False)
        if vertices_f32.size:
            self.vbo.write(vertices_f32)
        if indices_u32.size:
            self.ibo.write(indices_u32)
        self.vertex_count = len(vertices_f32)
        self.index_count = len(indices_u32)

    def append(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        """既存の内容の後ろに頂点とインデックスを追記する。

        `indices` は追記後の頂点列全体に対する index を指す。
        """

        vertices_f32 = np.ascontiguousarray(vertices, dtype=np.float32)
        indices_u32 = np.ascontiguousarray(indices, dtype=np.uint32)
        vertex_count = self.vertex_count + len(vertices_f32)
        index_count = self.index_count + len(indices_u32)
        self._reserve(vertex_count, index_count, keep=True)
        if vertices_f32.size:
            self.vbo.write(vertices_f32, offset=self.vertex_count * _VERTEX_BYTES)
        if indices_u32.size:
            self.ibo.write(indices_u32, offset=self.index_count * _INDEX_BYTES)
        self.vertex_count = vertex_count
        self.index_count = index_count

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）。"""
        self.vao.release()
        self.vbo.release()
        self.ibo.release()
