# どこで: `src/spiro/core/generator.py`。
# 何を: スピログラフ曲線の点を 1 つずつ生成する無限イテレータを提供する。
# なぜ: tick ごとに「次の 1 点」だけを取り出せるようにし、描画ループ側を単純に保つため。

from __future__ import annotations

from spiro.core.curve import CurveModel, ShapeParameters


class CurveGenerator:
    """曲線上の点を `t = 0, step, 2*step, ...` の順に返す再開可能なイテレータ。

    生成済みの点は保持しない（履歴は描画済みのサーフェス側にだけ残る）。
    """

    def __init__(
        self,
        parameters: ShapeParameters,
        *,
        step: float,
        model: CurveModel | None = None,
    ) -> None:
        _step = float(step)
        if _step <= 0:
            raise ValueError(f"step は正の値である必要がある: got={step!r}")
        self._model = model if model is not None else CurveModel()
        self._parameters = parameters
        self._step = _step
        self._index = 0

    @property
    def parameters(self) -> ShapeParameters:
        """現在の形状パラメータを返す。"""

        return self._parameters

    @property
    def t(self) -> float:
        """次に評価するパラメータ値を返す。"""

        # t = 生成回数 * step（加算の累積誤差を持たない）。
        return float(self._index) * self._step

    @property
    def step(self) -> float:
        return self._step

    def __iter__(self) -> CurveGenerator:
        return self

    def __next__(self) -> tuple[float, float]:
        return self.next()

    def next(self) -> tuple[float, float]:
        """現在の `t` の点を返し、`t` を `step` だけ進める。"""

        point = self._model.at(self._parameters, self.t)
        self._index += 1
        return point

    def reset(self, parameters: ShapeParameters) -> None:
        """形状パラメータを差し替え、`t` を 0 に戻す。"""

        self._parameters = parameters
        self._index = 0


__all__ = ["CurveGenerator"]
