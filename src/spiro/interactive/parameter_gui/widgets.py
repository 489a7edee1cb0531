# どこで: `src/spiro/interactive/parameter_gui/widgets.py`。
# 何を: 形状パラメータ用スライダー（表示レンジ 1..99 の整数）と、表示値 ⇔ 比率の変換を提供する。
# なぜ: imgui 呼び出しと値変換を分け、変換側をヘッドレスでテストできるようにするため。

from __future__ import annotations

from dataclasses import dataclass

SLIDER_MIN = 1
SLIDER_MAX = 99
# 表示値 / SLIDER_SCALE = 比率。
SLIDER_SCALE = 100.0


@dataclass(frozen=True, slots=True)
class SliderSpec:
    """スライダー 1 本の表示仕様。"""

    name: str
    label: str
    min_value: int = SLIDER_MIN
    max_value: int = SLIDER_MAX


def slider_to_ratio(value: int | float) -> float:
    """スライダー表示値を比率へ変換する（clamp はしない）。"""

    return float(value) / SLIDER_SCALE


def ratio_to_slider(ratio: float) -> int:
    """比率をスライダー表示値（SLIDER_MIN..SLIDER_MAX の整数）へ変換する。"""

    v = int(round(float(ratio) * SLIDER_SCALE))
    return max(SLIDER_MIN, min(SLIDER_MAX, v))


def widget_ratio_slider(spec: SliderSpec, ratio: float) -> tuple[bool, float]:
    """整数スライダーを描画し、(changed, ratio) を返す。

    Parameters
    ----------
    spec : SliderSpec
        表示ラベルとレンジ。
    ratio : float
        現在の比率（表示値の初期位置に使う）。

    Returns
    -------
    changed : bool
        値が変更された場合 True。
    ratio : float
        変更後の比率（未 clamp）。
    """

    import imgui  # type: ignore[import-untyped]

    changed, value = imgui.slider_int(
        f"{spec.label}##{spec.name}",
        ratio_to_slider(ratio),
        int(spec.min_value),
        int(spec.max_value),
    )
    return bool(changed), slider_to_ratio(value)
