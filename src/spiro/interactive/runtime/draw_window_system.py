# どこで: `src/spiro/interactive/runtime/draw_window_system.py`。
# 何を: RenderController が現在所有しているサーフェスを描画ウィンドウへ描画するサブシステムを提供する。
# なぜ: `src/spiro/api/run.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging

import pyglet
from pyglet.gl import Config

from spiro.core.surface import PathSurface
from spiro.interactive.gl.draw_renderer import DrawRenderer
from spiro.interactive.render_settings import RenderSettings
from spiro.interactive.runtime.render_controller import RenderController

_logger = logging.getLogger(__name__)


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(self, controller: RenderController, *, settings: RenderSettings) -> None:
        """キャンバス寸法 × render_scale の window と、その GL コンテキスト上の renderer を作る。"""

        self._controller = controller
        self._settings = settings

        canvas_w, canvas_h = settings.canvas_size
        # 細い線のギザつきを抑えるため MSAA を有効にする。
        self.window = pyglet.window.Window(  # type: ignore[abstract]
            width=int(canvas_w * settings.render_scale),
            height=int(canvas_h * settings.render_scale),
            resizable=False,
            caption="Spiro",
            config=Config(double_buffer=True, sample_buffers=1, samples=4),  # type: ignore[abstract]
        )
        self._renderer = DrawRenderer(self.window)

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._renderer.ctx.screen.use()

        fb_w, fb_h = self.window.get_framebuffer_size()
        self._renderer.viewport(fb_w, fb_h)
        self._renderer.clear(self._settings.background_color)

        # リセットでサーフェスが差し替わっても、ここで毎フレーム最新を参照する。
        surface = self._controller.surface
        if not isinstance(surface, PathSurface):
            raise TypeError(f"描画できないサーフェス型: {type(surface).__name__}")
        self._renderer.render_surface(
            surface,
            color=self._settings.line_color,
            thickness=self._settings.line_thickness,
        )

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        try:
            # renderer が保持している GPU リソースを破棄してから window を閉じる。
            self._renderer.release()
        except Exception:
            _logger.exception("Failed to release renderer")
        finally:
            self.window.close()
