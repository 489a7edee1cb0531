# どこで: `src/spiro/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: 描画ウィンドウ/レンダラーへ渡す見た目の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

from spiro.core.runtime_config import RuntimeConfig


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    background_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    line_thickness: float = 1.0
    line_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    render_scale: float = 1.0
    canvas_size: tuple[int, int] = (500, 500)

    @classmethod
    def from_config(cls, cfg: RuntimeConfig) -> RenderSettings:
        return cls(
            background_color=cfg.background_color,
            line_thickness=cfg.line_thickness,
            line_color=cfg.line_color,
            render_scale=cfg.render_scale,
            canvas_size=cfg.canvas_size,
        )
