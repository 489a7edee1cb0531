"""
どこで: `src/spiro/api/run.py`。公開 API のランナー実装。
何を: 描画ウィンドウ / Parameter GUI / tick タイマーを組み立て、スピログラフをリアルタイム描画する。
なぜ: `python -m spiro` や `main.py` から 1 関数で起動できる経路を用意するため。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pyglet

from spiro.core.curve import ShapeParameters
from spiro.core.runtime_config import runtime_config, set_config_path
from spiro.core.surface import PathSurfaceFactory
from spiro.interactive.render_settings import RenderSettings
from spiro.interactive.runtime.draw_window_system import DrawWindowSystem
from spiro.interactive.runtime.render_controller import RenderController
from spiro.interactive.runtime.timer import PygletTimer
from spiro.interactive.runtime.window_loop import WindowSystem, run_window_loop

_logger = logging.getLogger(__name__)


def run(
    *,
    config_path: str | Path | None = None,
    parameter_gui: bool = True,
    fps: float = 60.0,
) -> None:
    """pyglet ウィンドウを生成し、スピログラフを tick ごとに 1 線分ずつ描き足す。

    Parameters
    ----------
    config_path : str | Path | None
        明示的に読む config.yaml。None の場合は既定の探索のみ。
    parameter_gui : bool
        True の場合、別ウィンドウで k / l のスライダーを表示する。
    fps : float
        画面更新の目標フレームレート（曲線の tick 周期とは独立）。

    Returns
    -------
    None
        どちらかのウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()
    _logger.info("Config loaded: %s", cfg.config_path or "(packaged defaults)")

    # pyglet の Window 作成前にオプションを設定する。
    pyglet.options["vsync"] = True

    settings = RenderSettings.from_config(cfg)
    parameters = ShapeParameters(l=cfg.initial_l, k=cfg.initial_k, r=cfg.radius)

    # 起動時にサーフェスを確保できなければ、ここで例外が送出され起動失敗になる。
    controller = RenderController(
        parameters,
        step=cfg.step,
        surfaces=PathSurfaceFactory(cfg.canvas_size),
        center=cfg.canvas_center,
    )

    # --- サブシステムの組み立て ---
    draw_window = DrawWindowSystem(controller, settings=settings)
    draw_window.window.set_location(*cfg.window_pos_draw)

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [draw_window.close]
    systems: list[WindowSystem] = [draw_window]

    try:
        if parameter_gui:
            # Parameter GUI は依存が重い（pyimgui）ので、使うときだけ遅延 import する。
            from spiro.interactive.runtime.parameter_gui_system import (
                ParameterGUIWindowSystem,
            )

            gui = ParameterGUIWindowSystem(controller=controller, config=cfg)
            gui.window.set_location(*cfg.window_pos_parameter_gui)
            closers.append(gui.close)
            systems.append(gui)

        controller.start(PygletTimer(), period=cfg.tick_interval_s)
        closers.append(controller.close)

        # --- ループの実行 ---
        run_window_loop(systems, fps=fps)
    finally:
        # 作成順の逆で閉じる。1 つの失敗で残りの後始末を止めない。
        for close in reversed(closers):
            try:
                close()
            except Exception:
                _logger.exception("Failed to close %r", close)
