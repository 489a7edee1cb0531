# どこで: `src/spiro/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/タイマー/コントローラ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/spiro/api/run.py` を配線だけに保ち、責務ごとの実装差し替えを容易にするため。

from __future__ import annotations

__all__ = []
