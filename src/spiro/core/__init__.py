# どこで: `src/spiro/core/__init__.py`。
# 何を: GUI 非依存のコア（曲線モデル / 生成器 / サーフェス / 設定）を集約する。
# なぜ: interactive 層を import せずにコアだけを利用・テストできるようにするため。

from __future__ import annotations

from spiro.core.curve import CurveModel, ShapeParameters, clamp_ratio
from spiro.core.generator import CurveGenerator
from spiro.core.surface import PathSurface, PathSurfaceFactory, SurfaceCreationError

__all__ = [
    "CurveGenerator",
    "CurveModel",
    "PathSurface",
    "PathSurfaceFactory",
    "ShapeParameters",
    "SurfaceCreationError",
    "clamp_ratio",
]
