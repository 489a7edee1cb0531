"""
どこで: リポジトリ直下 `main.py`。
何を: 既定設定でスピログラフのプレビューを起動する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import sys

sys.path.append("src")

from spiro.api import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(parameter_gui=True)
