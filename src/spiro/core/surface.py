# どこで: `src/spiro/core/surface.py`。
# 何を: 線分を積み上げる描画サーフェス（path + ink）と、その生成ファクトリを提供する。
# なぜ: 描画状態を GPU から切り離して保持し、リセット時は丸ごと差し替えられるようにするため。

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Protocol

import numpy as np


class SurfaceCreationError(RuntimeError):
    """サーフェスを確保できなかったことを表す（回復不能）。"""


class DrawingSurface(Protocol):
    """RenderController が要求するサーフェスの最小インターフェース。"""

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...


class SurfaceFactory(Protocol):
    def create(self) -> DrawingSurface: ...


class PathSurface:
    """2D キャンバス風の path を CPU 側に蓄積するサーフェス。

    Notes
    -----
    - 「現在の path」はサブパス（折れ線）の列。`move_to` で新しいサブパスを開始する。
    - サブパスが無い状態の `line_to` は、その点でサブパスを開始するだけ（線は引かない）。
    - `stroke()` した時点の path が ink（表示対象）になる。
    - `begin_path()` は path を空にするが、stroke 済みの ink は残る。
    - 部分的な消去は無い。空に戻したいときはサーフェスごと作り直す。

    頂点は追記のみの float32 バッファ（容量は倍々で拡張）に描画順で並ぶ。
    stroke 済みの頂点は常にバッファ先頭の連続区間なので、`realize()` はコピー無しで返せる。
    """

    def __init__(self, width: int, height: int, *, initial_capacity: int = 1024) -> None:
        self._width = int(width)
        self._height = int(height)
        self._coords = np.empty((max(1, int(initial_capacity)), 2), dtype=np.float32)
        self._count = 0
        # stroke 済み（表示対象）の頂点数。`_coords[:_stroked]` が ink。
        self._stroked = 0
        # 各サブパスの先頭頂点 index（昇順）。
        self._starts: list[int] = []
        # 現在の path にサブパスがあるか（begin_path 直後は False）。
        self._open = False
        self._version = 0
        self._offsets = np.zeros((1,), dtype=np.int32)
        self._offsets_version = 0

    @property
    def size(self) -> tuple[int, int]:
        """キャンバス寸法（座標系の幅と高さ）。"""

        return self._width, self._height

    @property
    def version(self) -> int:
        """表示内容が変わるたびに増えるカウンタ。"""

        return self._version

    def begin_path(self) -> None:
        # stroke されなかった頂点は二度と表示されないので捨てる。
        if self._count > self._stroked:
            self._count = self._stroked
            del self._starts[bisect_left(self._starts, self._stroked) :]
        self._open = False

    def move_to(self, x: float, y: float) -> None:
        self._starts.append(self._count)
        self._open = True
        self._append(x, y)

    def line_to(self, x: float, y: float) -> None:
        if not self._open:
            self.move_to(x, y)
            return
        self._append(x, y)

    def stroke(self) -> None:
        if self._count != self._stroked:
            self._stroked = self._count
            self._version += 1

    def _append(self, x: float, y: float) -> None:
        n = self._count
        if n == self._coords.shape[0]:
            grown = np.empty((n * 2, 2), dtype=np.float32)
            grown[:n] = self._coords[:n]
            self._coords = grown
        self._coords[n, 0] = x
        self._coords[n, 1] = y
        self._count = n + 1

    def polylines(self) -> list[list[tuple[float, float]]]:
        """表示対象の折れ線（2 頂点以上）を描画順に返す。"""

        coords, offsets = self.realize()
        out: list[list[tuple[float, float]]] = []
        for start, stop in zip(offsets[:-1].tolist(), offsets[1:].tolist()):
            if stop - start >= 2:
                out.append([(float(x), float(y)) for x, y in coords[start:stop].tolist()])
        return out

    def realize(self) -> tuple[np.ndarray, np.ndarray]:
        """表示対象を `(coords, offsets)` 配列として返す。

        Returns
        -------
        coords : np.ndarray
            shape (N, 2) の float32 頂点列。内部バッファのビュー（コピーしない）。
            以降の描画で先頭 N 行が書き換わることは無い。
        offsets : np.ndarray
            shape (M+1,) の int32。i 本目の折れ線は `coords[offsets[i]:offsets[i+1]]`。
            1 頂点だけの折れ線も含む（描画側で読み飛ばす）。書き換えないこと。
        """

        if self._offsets_version != self._version:
            stroked = self._stroked
            visible = self._starts[: bisect_left(self._starts, stroked)]
            self._offsets = np.asarray([*visible, stroked], dtype=np.int32)
            self._offsets_version = self._version
        return self._coords[: self._stroked], self._offsets


@dataclass(frozen=True, slots=True)
class PathSurfaceFactory:
    """キャンバス寸法を固定した PathSurface のファクトリ。"""

    canvas_size: tuple[int, int]

    def create(self) -> PathSurface:
        w, h = self.canvas_size
        if int(w) <= 0 or int(h) <= 0:
            raise SurfaceCreationError(
                f"サーフェスを作成できない（寸法が不正）: canvas_size={self.canvas_size!r}"
            )
        return PathSurface(int(w), int(h))


__all__ = [
    "DrawingSurface",
    "PathSurface",
    "PathSurfaceFactory",
    "SurfaceCreationError",
    "SurfaceFactory",
]
