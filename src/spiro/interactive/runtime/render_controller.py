# どこで: `src/spiro/interactive/runtime/render_controller.py`。
# 何を: tick / パラメータ変更イベントを受けて、曲線生成器とサーフェスを一体で更新する状態機械を提供する。
# なぜ: 「表示中の曲線は常に現在のパラメータで t=0 から描いた 1 本だけ」を 1 箇所で保証するため。

from __future__ import annotations

import logging
from dataclasses import dataclass

from spiro.core.curve import CurveModel, ShapeParameters, clamp_ratio
from spiro.core.generator import CurveGenerator
from spiro.core.surface import DrawingSurface, SurfaceFactory
from spiro.interactive.runtime.timer import Timer, TimerSubscription

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Tick:
    """タイマー駆動の 1 ステップ（1 点進めて 1 線分描く）。"""


@dataclass(frozen=True, slots=True)
class LChanged:
    """`l`（描画点オフセット比）スライダーの変更。値は未 clamp のまま受け取る。"""

    value: object


@dataclass(frozen=True, slots=True)
class KChanged:
    """`k`（内円/外円比）スライダーの変更。値は未 clamp のまま受け取る。"""

    value: object


ControllerEvent = Tick | LChanged | KChanged


class RenderController:
    """CurveGenerator と DrawingSurface を排他的に所有し、イベントを 1 つずつ処理する。

    Notes
    -----
    - 状態は Running のみ（一時停止は無い）。
    - イベントは到着順に 1 つずつ最後まで処理する。pyglet のイベントループ（単一スレッド）上で
      呼ばれる前提のため、ロックは持たない。
    - リセットでは新しいサーフェスを先に確保し、成功してから generator とまとめて差し替える。
      確保に失敗した場合は旧状態のまま例外を送出する（回復はしない）。
    """

    def __init__(
        self,
        parameters: ShapeParameters,
        *,
        step: float,
        surfaces: SurfaceFactory,
        center: tuple[float, float],
    ) -> None:
        self._surfaces = surfaces
        self._center = (float(center[0]), float(center[1]))
        p = parameters.with_l(clamp_ratio(parameters.l, fallback=parameters.l)).with_k(
            clamp_ratio(parameters.k, fallback=parameters.k)
        )
        # 起動時の確保失敗はそのまま送出する（起動失敗）。
        self._surface = surfaces.create()
        self._generator = CurveGenerator(p, step=step)
        self._subscription: TimerSubscription | None = None

        # 中心から最寄りのキャンバス端までに収まらなければ見切れる。
        bound = CurveModel.bounding_radius(p)
        limit = min(self._center)
        if bound > limit:
            _logger.warning(
                "Curve may not fit on the canvas: bounding_radius=%.1f > %.1f", bound, limit
            )

    @property
    def surface(self) -> DrawingSurface:
        """現在のサーフェスを返す（リセット後は別オブジェクトになる）。"""

        return self._surface

    @property
    def parameters(self) -> ShapeParameters:
        return self._generator.parameters

    @property
    def t(self) -> float:
        """次の tick で描く点のパラメータ値を返す。"""

        return self._generator.t

    def dispatch(self, event: ControllerEvent) -> None:
        """イベントを 1 つ処理する。"""

        if isinstance(event, Tick):
            self._on_tick()
        elif isinstance(event, LChanged):
            current = self._generator.parameters
            l = self._clamp(event.value, fallback=current.l, name="l")
            self._reset(current.with_l(l))
        elif isinstance(event, KChanged):
            current = self._generator.parameters
            k = self._clamp(event.value, fallback=current.k, name="k")
            self._reset(current.with_k(k))
        else:
            raise TypeError(f"未知のイベント: {event!r}")

    def tick(self) -> None:
        self.dispatch(Tick())

    def set_l(self, value: object) -> None:
        self.dispatch(LChanged(value))

    def set_k(self, value: object) -> None:
        self.dispatch(KChanged(value))

    def start(self, timer: Timer, *, period: float) -> None:
        """`period` 秒ごとに Tick を受け取るようタイマーを購読する。"""

        if self._subscription is not None:
            raise RuntimeError("RenderController は既に開始済み")
        self._subscription = timer.schedule(float(period), self.tick)
        _logger.debug("Timer started: period=%.4fs", float(period))

    def close(self) -> None:
        """タイマー購読を解除する（二重 close は no-op）。"""

        subscription = self._subscription
        self._subscription = None
        if subscription is not None:
            subscription.cancel()

    def _on_tick(self) -> None:
        x, y = self._generator.next()
        cx, cy = self._center
        surface = self._surface
        surface.line_to(cx + x, cy + y)
        surface.stroke()

    def _clamp(self, value: object, *, fallback: float, name: str) -> float:
        v = clamp_ratio(value, fallback=fallback)
        if v == fallback and not _is_number(value):
            _logger.warning("Ignored non-numeric %s=%r; keeping %s", name, value, fallback)
        return v

    def _reset(self, parameters: ShapeParameters) -> None:
        surface = self._surfaces.create()
        self._generator.reset(parameters)
        self._surface = surface
        _logger.debug(
            "Curve reset: l=%.2f k=%.2f r=%.1f", parameters.l, parameters.k, parameters.r
        )


def _is_number(value: object) -> bool:
    try:
        return float(value) == float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False


__all__ = ["ControllerEvent", "KChanged", "LChanged", "RenderController", "Tick"]
