# どこで: `src/spiro/interactive/runtime/window_loop.py`。
# 何を: 描画ウィンドウと Parameter GUI ウィンドウを `pyglet.app.run()` 1 本で一定間隔に再描画する。
# なぜ: tick / スライダー入力 / 描画を同じ単一スレッドのイベントループで到着順に処理するため。

from __future__ import annotations

from typing import Any, Protocol, Sequence

import pyglet


class WindowSystem(Protocol):
    """ウィンドウを 1 枚持ち、その back buffer へ 1 フレーム描けるサブシステム。"""

    window: Any

    def draw_frame(self) -> None: ...


def run_window_loop(systems: Sequence[WindowSystem], *, fps: float) -> None:
    """どれかのウィンドウが閉じられるまで、全ウィンドウを `fps` 間隔で再描画する。

    Notes
    -----
    `Window.draw(dt)` が switch_to → on_draw（= `draw_frame`）→ flip を行う。
    曲線の tick はこのループとは別に RenderController のタイマーで進むため、
    1 フレームの間に複数の線分が増えることがある。
    """

    if fps <= 0:
        raise ValueError(f"fps は正の値である必要がある: got={fps!r}")
    windows = [system.window for system in systems]

    def request_exit(*_: object) -> None:
        pyglet.app.exit()

    for system in systems:
        system.window.push_handlers(on_close=request_exit, on_draw=system.draw_frame)

    def redraw(dt: float) -> None:
        for window in windows:
            # 閉じたウィンドウへは描かない（app.exit 後、ループを抜けるまでの間）。
            if window in pyglet.app.windows:
                window.draw(dt)

    pyglet.clock.schedule_interval(redraw, 1.0 / float(fps))
    try:
        pyglet.app.run(interval=None)
    finally:
        pyglet.clock.unschedule(redraw)


__all__ = ["WindowSystem", "run_window_loop"]
