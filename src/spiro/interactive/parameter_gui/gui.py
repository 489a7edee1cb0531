# どこで: `src/spiro/interactive/parameter_gui/gui.py`。
# 何を: 形状パラメータ（k / l）のスライダー 2 本を 1 フレーム分レイアウトし、変更を controller へ送る。
# なぜ: ImGui の枠（コンテキスト/ウィンドウ/renderer）とウィジェット配置を分け、後者を小さく保つため。

from __future__ import annotations

from spiro.interactive.runtime.render_controller import RenderController

from .widgets import SliderSpec, widget_ratio_slider

K_SLIDER = SliderSpec(name="k", label="k")
L_SLIDER = SliderSpec(name="l", label="l")


class ParameterGUI:
    """RenderController の形状パラメータを編集するスライダー群。

    `draw(width, height)` は `imgui.new_frame()` と `imgui.render()` の間で呼ぶ。
    スライダーが動いたフレームでは、そのまま controller へ変更イベントを送る。
    """

    def __init__(self, *, controller: RenderController, title: str = "Parameters") -> None:
        self._controller = controller
        self._title = str(title)

    def draw(self, width: int, height: int) -> bool:
        """ウィンドウ全面に k, l の順でスライダーを描き、どちらかが動いたら True を返す。"""

        import imgui  # type: ignore[import-untyped]

        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(width, height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE
            | imgui.WINDOW_NO_COLLAPSE
            | imgui.WINDOW_NO_TITLE_BAR,
        )
        changed = False
        try:
            k_changed, k = widget_ratio_slider(K_SLIDER, self._controller.parameters.k)
            if k_changed:
                self._controller.set_k(k)
                changed = True
            # k の変更でリセットされた後の値から描く。
            l_changed, l = widget_ratio_slider(L_SLIDER, self._controller.parameters.l)
            if l_changed:
                self._controller.set_l(l)
                changed = True
        finally:
            imgui.end()
        return changed
