# どこで: `src/spiro/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス寸法や曲線の刻み幅などを、コードを触らずにユーザーが変えられるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """spiro の実行時設定。"""

    config_path: Path | None
    canvas_size: tuple[int, int]
    render_scale: float
    background_color: tuple[float, float, float]
    line_color: tuple[float, float, float]
    line_thickness: float
    radius: float
    step: float
    initial_l: float
    initial_k: float
    tick_interval_ms: float
    window_pos_draw: tuple[int, int]
    window_pos_parameter_gui: tuple[int, int]
    parameter_gui_window_size: tuple[int, int]

    @property
    def canvas_center(self) -> tuple[float, float]:
        """曲線の原点を置くキャンバス座標（キャンバス中心）を返す。"""

        w, h = self.canvas_size
        return float(w) / 2.0, float(h) / 2.0

    @property
    def tick_interval_s(self) -> float:
        return float(self.tick_interval_ms) / 1000.0


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".spiro" / "config.yaml",
        home / ".config" / "spiro" / "config.yaml",
    )


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _merge_mapping(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping を再帰的にマージする（override 側が後勝ち）。"""

    out = dict(base)
    for k, v in override.items():
        cur = out.get(k)
        if isinstance(cur, dict) and isinstance(v, dict):
            out[k] = _merge_mapping(cur, v)
        else:
            out[k] = v
    return out


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_rgb01(value: Any, *, key: str) -> tuple[float, float, float]:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        r, g, b = (float(v) for v in value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [r, g, b]（0..1）の配列である必要があります: got={value!r}") from exc
    return (r, g, b)


def _as_float(value: Any, *, key: str) -> float:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_positive_float(value: Any, *, key: str) -> float:
    v = _as_float(value, key=key)
    if v <= 0:
        raise ValueError(f"{key} は正の値である必要があります: got={v}")
    return v


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("spiro")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="spiro/resource/default_config.yaml")


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち、mapping はキー単位でマージ）:
    1) 同梱 default_config.yaml
    2) `./.spiro/config.yaml` / `~/.config/spiro/config.yaml`（先に見つかった方）
    3) `set_config_path()` で指定した config
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_mapping(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_mapping(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    canvas = _as_mapping(payload.get("canvas"), key="canvas")
    canvas_size = _as_int_pair(canvas.get("size"), key="canvas.size")
    if canvas_size[0] <= 0 or canvas_size[1] <= 0:
        raise ValueError(f"canvas.size は正の値である必要があります: got={canvas_size}")

    curve = _as_mapping(payload.get("curve"), key="curve")
    timer = _as_mapping(payload.get("timer"), key="timer")

    ui = _as_mapping(payload.get("ui"), key="ui")
    window_positions = _as_mapping(ui.get("window_positions"), key="ui.window_positions")
    parameter_gui = _as_mapping(ui.get("parameter_gui"), key="ui.parameter_gui")

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        canvas_size=canvas_size,
        render_scale=_as_positive_float(canvas.get("render_scale"), key="canvas.render_scale"),
        background_color=_as_rgb01(canvas.get("background_color"), key="canvas.background_color"),
        line_color=_as_rgb01(canvas.get("line_color"), key="canvas.line_color"),
        line_thickness=_as_positive_float(
            canvas.get("line_thickness"), key="canvas.line_thickness"
        ),
        radius=_as_positive_float(curve.get("radius"), key="curve.radius"),
        step=_as_positive_float(curve.get("step"), key="curve.step"),
        initial_l=_as_float(curve.get("initial_l"), key="curve.initial_l"),
        initial_k=_as_float(curve.get("initial_k"), key="curve.initial_k"),
        tick_interval_ms=_as_positive_float(
            timer.get("tick_interval_ms"), key="timer.tick_interval_ms"
        ),
        window_pos_draw=_as_int_pair(
            window_positions.get("draw"), key="ui.window_positions.draw"
        ),
        window_pos_parameter_gui=_as_int_pair(
            window_positions.get("parameter_gui"), key="ui.window_positions.parameter_gui"
        ),
        parameter_gui_window_size=_as_int_pair(
            parameter_gui.get("window_size"), key="ui.parameter_gui.window_size"
        ),
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
