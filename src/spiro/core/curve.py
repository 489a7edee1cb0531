# どこで: `src/spiro/core/curve.py`。
# 何を: 2 円モデルのスピログラフ曲線（形状パラメータ + 点評価）を提供する。
# なぜ: 曲線の数式を副作用のない純粋関数として切り出し、生成器/描画から独立してテストするため。

from __future__ import annotations

import math
from dataclasses import dataclass, replace

# スライダー入力を受け付ける比率レンジ。k=0 は式の分母になるため含めない。
RATIO_MIN = 0.01
RATIO_MAX = 0.99


@dataclass(frozen=True, slots=True)
class ShapeParameters:
    """スピログラフの形状パラメータ。

    Attributes
    ----------
    l : float
        内円中心から描画点までの距離（内円半径に対する比）。
    k : float
        外円に対する内円の大きさの比。0 は未定義（呼び出し側で避ける）。
    r : float
        外円の半径。実行中は固定。
    """

    l: float
    k: float
    r: float

    def with_l(self, l: float) -> ShapeParameters:
        """`l` だけ差し替えたコピーを返す。"""

        return replace(self, l=float(l))

    def with_k(self, k: float) -> ShapeParameters:
        """`k` だけ差し替えたコピーを返す。"""

        return replace(self, k=float(k))


def spirograph_point(l: float, k: float, r: float, t: float) -> tuple[float, float]:
    """パラメータ `t` における曲線上の点 `(x, y)` を返す。"""

    # 内円の自転角。k=0 の防御はしない（境界で clamp 済みの前提）。
    inner = t * (1.0 - k) / k
    x = r * ((1.0 - k) * math.cos(t) + l * k * math.cos(inner))
    y = r * ((1.0 - k) * math.sin(t) - l * k * math.sin(inner))
    return x, y


class CurveModel:
    """形状パラメータと `t` から曲線上の点を求める純粋モデル。

    状態を持たないため、インスタンスは共有してよい。
    """

    def at(self, parameters: ShapeParameters, t: float) -> tuple[float, float]:
        """`parameters` の曲線上、パラメータ `t` の点を返す。"""

        return spirograph_point(parameters.l, parameters.k, parameters.r, float(t))

    @staticmethod
    def bounding_radius(parameters: ShapeParameters) -> float:
        """曲線全体を含む原点中心の円の半径 `r * (1 + l*k)` を返す。"""

        return float(parameters.r) * (1.0 + float(parameters.l) * float(parameters.k))


def clamp_ratio(value: object, *, fallback: float) -> float:
    """入力値を `[RATIO_MIN, RATIO_MAX]` に収めて返す。

    Notes
    -----
    - `+inf` / `-inf` はそれぞれ上限 / 下限に寄せる。
    - NaN や数値に変換できない値は `fallback` を返す（呼び出し側の現在値を想定）。
    """

    try:
        v = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return float(fallback)
    if math.isnan(v):
        return float(fallback)
    return min(RATIO_MAX, max(RATIO_MIN, v))


__all__ = [
    "RATIO_MAX",
    "RATIO_MIN",
    "CurveModel",
    "ShapeParameters",
    "clamp_ratio",
    "spirograph_point",
]
