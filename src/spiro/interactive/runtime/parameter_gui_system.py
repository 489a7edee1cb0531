# どこで: `src/spiro/interactive/runtime/parameter_gui_system.py`。
# 何を: Parameter GUI 用の pyglet ウィンドウ・ImGui コンテキスト・renderer を持ち、1 フレームずつ描画する。
# なぜ: `src/spiro/api/run.py` の `run()` から GUI 初期化/描画/後始末を分離し、肥大化を防ぐため。

from __future__ import annotations

import time

import imgui  # type: ignore[import-untyped]
import pyglet
from imgui.integrations.pyglet import create_renderer  # type: ignore[import-untyped]

from spiro.core.runtime_config import RuntimeConfig
from spiro.interactive.parameter_gui import ParameterGUI
from spiro.interactive.runtime.render_controller import RenderController

_BACKGROUND = (0.12, 0.12, 0.12, 1.0)


class ParameterGUIWindowSystem:
    """Parameter GUI（別ウィンドウ）のサブシステム。"""

    def __init__(self, *, controller: RenderController, config: RuntimeConfig) -> None:
        w, h = config.parameter_gui_window_size
        self.window = pyglet.window.Window(  # type: ignore[abstract]
            width=int(w),
            height=int(h),
            caption="Spiro Parameters",
            resizable=False,
            vsync=False,
        )
        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_dark()
        self._renderer = create_renderer(self.window)
        self._gui = ParameterGUI(controller=controller)
        self._prev_time = time.monotonic()
        self._closed = False

    def _sync_io(self, dt: float) -> None:
        """ImGui IO をウィンドウ状態（サイズ / Retina スケール / Δt）に合わせる。"""

        io = imgui.get_io()
        io.delta_time = max(float(dt), 1e-4)
        fb_w, fb_h = self.window.get_framebuffer_size()
        win_w, win_h = self.window.width, self.window.height
        io.display_size = (float(win_w), float(win_h))
        io.display_fb_scale = (fb_w / max(1, win_w), fb_h / max(1, win_h))

    def draw_frame(self) -> None:
        """1 フレーム分の GUI を描画する（`flip()` は呼ばない）。"""

        if self._closed:
            return
        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui.set_current_context(self._context)
        # 注: renderer.process_inputs() は内部で pyglet.clock.tick() を呼び、app.run() 駆動の clock を
        # 二重に進めるので呼ばない。入力は renderer が window に張ったハンドラ経由で届く。
        imgui.new_frame()
        self._sync_io(dt)
        self._gui.draw(self.window.width, self.window.height)
        imgui.render()

        pyglet.gl.glClearColor(*_BACKGROUND)
        self.window.clear()
        self._renderer.render(imgui.get_draw_data())

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する（二重 close は no-op）。"""

        if self._closed:
            return
        self._closed = True
        try:
            self._renderer.shutdown()
            imgui.destroy_context(self._context)
        finally:
            self.window.close()
