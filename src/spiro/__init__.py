# どこで: `src/spiro/__init__.py`。
# 何を: ルート `spiro` パッケージを定義する。
# なぜ: import 起点を `spiro` に統一するため。

from __future__ import annotations

from spiro.core.curve import CurveModel, ShapeParameters
from spiro.core.generator import CurveGenerator

__all__ = ["CurveGenerator", "CurveModel", "ShapeParameters", "run"]


def run(**kwargs: object) -> None:
    """`spiro.api.run.run` の遅延 import ラッパ（pyglet を import 時に読み込まないため）。"""

    from spiro.api.run import run as _run

    _run(**kwargs)  # type: ignore[arg-type]
