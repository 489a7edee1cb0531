# どこで: `src/spiro/api/__init__.py`。
# 何を: 公開 API（run）を集約する。
# なぜ: 利用側の import パスを `spiro.api` に安定させるため。

from __future__ import annotations

from spiro.api.run import run

__all__ = ["run"]
