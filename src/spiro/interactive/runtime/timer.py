# どこで: `src/spiro/interactive/runtime/timer.py`。
# 何を: 一定周期でコールバックを呼ぶタイマー（pyglet.clock ベース）と購読ハンドルを提供する。
# なぜ: RenderController を pyglet に直接依存させず、テストでは偽のタイマーへ差し替えられるようにするため。

from __future__ import annotations

from typing import Any, Callable, Protocol


class TimerSubscription(Protocol):
    def cancel(self) -> None: ...


class Timer(Protocol):
    def schedule(self, period: float, callback: Callable[[], None]) -> TimerSubscription: ...


class ClockSubscription:
    """`schedule_interval` で登録した関数の登録解除ハンドル。"""

    def __init__(self, clock: Any, func: Callable[[float], None]) -> None:
        self._clock = clock
        self._func: Callable[[float], None] | None = func

    def cancel(self) -> None:
        """登録を解除する（二重呼び出しは no-op）。"""

        func = self._func
        if func is None:
            return
        self._func = None
        self._clock.unschedule(func)


class PygletTimer:
    """pyglet の clock で周期実行するタイマー。

    Notes
    -----
    `clock` 未指定時は `pyglet.clock`（既定クロック）を使う。
    pyglet のスケジューラは厳密な周期を保証しない（ジッタは許容）。
    """

    def __init__(self, clock: Any | None = None) -> None:
        if clock is None:
            import pyglet

            clock = pyglet.clock
        self._clock = clock

    def schedule(self, period: float, callback: Callable[[], None]) -> ClockSubscription:
        """`period` 秒ごとに `callback()` を呼ぶよう登録し、解除ハンドルを返す。"""

        _period = float(period)
        if _period <= 0:
            raise ValueError(f"period は正の値である必要がある: got={period!r}")

        def _on_interval(_dt: float) -> None:
            callback()

        self._clock.schedule_interval(_on_interval, _period)
        return ClockSubscription(self._clock, _on_interval)


__all__ = ["ClockSubscription", "PygletTimer", "Timer", "TimerSubscription"]
