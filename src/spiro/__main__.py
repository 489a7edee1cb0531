# どこで: `src/spiro/__main__.py`。
# 何を: `python -m spiro` / `spiro` コマンドのエントリポイント。
# なぜ: config パスとログレベルだけを受け取り、`run()` へ渡す薄い CLI を用意するため。

from __future__ import annotations

import argparse
import logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="spiro", description="Animated spirograph.")
    parser.add_argument("--config", default=None, help="config.yaml のパス")
    parser.add_argument(
        "--no-gui",
        action="store_true",
        help="Parameter GUI（k / l スライダー）を表示しない",
    )
    parser.add_argument("--log-level", default="INFO", help="logging レベル（既定: INFO）")
    args = parser.parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper())

    from spiro.api.run import run

    run(config_path=args.config, parameter_gui=not args.no_gui)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
