# どこで: `src/spiro/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送を描画ウィンドウから分離し、責務を明確にするため。

from __future__ import annotations

import moderngl
import numpy as np
from pyglet.window import Window

from spiro.core.surface import PathSurface
from spiro.interactive.gl.index_buffer import build_appended_line_indices, build_line_indices
from spiro.interactive.gl.line_mesh import LineMesh
from spiro.interactive.gl.shader import Shader


def canvas_projection(width: float, height: float) -> np.ndarray:
    """キャンバス座標（左上原点・y 下向き）を NDC へ写す正射影行列を返す（ModernGL 用に転置済み）。"""

    return np.array(
        [
            [2.0 / width, 0.0, 0.0, -1.0],
            [0.0, -2.0 / height, 0.0, 1.0],
            [0.0, 0.0, -1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype="f4",
    ).T


class DrawRenderer:
    """PathSurface の stroke 済み折れ線を描くレンダラー。

    GPU 側のメッシュは直前に描いたサーフェスの写しとして持つ。
    同じサーフェスで最後の折れ線が伸びただけなら差分のみ追記し、
    サーフェスが差し替わったとき（リセット）は作り直す。
    """

    def __init__(self, window: Window) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.program = Shader.create_shader(self.ctx)
        self._mesh = LineMesh(self.ctx, self.program)
        self._surface: PathSurface | None = None
        self._version = -1
        self._offsets = np.zeros((1,), dtype=np.int32)

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def render_surface(
        self,
        surface: PathSurface,
        *,
        color: tuple[float, float, float],
        thickness: float,
    ) -> None:
        """サーフェスを描画する（GPU への転送は変化した分だけ）。"""

        if surface is not self._surface:
            self._surface = surface
            self._version = -1
            self._offsets = np.zeros((1,), dtype=np.int32)
            w, h = surface.size
            self.program["projection"].write(canvas_projection(float(w), float(h)).tobytes())
        if surface.version != self._version:
            self._sync(surface)

        if self._mesh.index_count == 0:
            return
        self.program["line_thickness"].value = float(thickness)
        self.program["color"].value = (*color, 1.0)
        self._mesh.vao.render(mode=self.ctx.LINE_STRIP, vertices=self._mesh.index_count)

    def _sync(self, surface: PathSurface) -> None:
        coords, offsets = surface.realize()
        tail = build_appended_line_indices(self._offsets, offsets)
        if tail is None:
            self._mesh.replace(coords, build_line_indices(offsets))
        else:
            self._mesh.append(coords[self._mesh.vertex_count :], tail)
        self._offsets = offsets
        self._version = surface.version

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._surface = None
        self._mesh.release()
        self.program.release()
        self.ctx.release()
