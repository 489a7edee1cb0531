from pathlib import Path

import pytest

from spiro.core.runtime_config import runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.canvas_size == (500, 500)
    assert cfg.canvas_center == (250.0, 250.0)
    assert cfg.radius == 150.0
    assert cfg.step == 0.15
    assert cfg.initial_l == 0.22
    assert cfg.initial_k == 0.46
    assert cfg.tick_interval_ms == 12.0
    assert cfg.tick_interval_s == pytest.approx(0.012)
    assert cfg.background_color == (1.0, 1.0, 1.0)
    assert cfg.line_color == (0.0, 0.0, 0.0)
    assert cfg.window_pos_draw == (25, 25)


def test_runtime_config_is_cached(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)
    assert runtime_config() is runtime_config()


def test_discovered_config_overrides_only_given_keys(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".spiro" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("curve:\n  step: 0.05\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.step == 0.05
    # 同じ mapping 内の他のキーは同梱デフォルトのまま
    assert cfg.radius == 150.0
    assert cfg.initial_k == 0.46


def test_explicit_config_overrides_discovered_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".spiro" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("canvas:\n  size: [600, 600]\n", encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("canvas:\n  size: [800, 400]\ntimer:\n  tick_interval_ms: 20\n", encoding="utf-8")
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.canvas_size == (800, 400)
    assert cfg.canvas_center == (400.0, 200.0)
    assert cfg.tick_interval_s == pytest.approx(0.02)


def test_explicit_config_path_missing_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(tmp_path / "missing.yaml")

    with pytest.raises(FileNotFoundError):
        runtime_config()


def test_unsupported_version_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("version: 2\n", encoding="utf-8")
    set_config_path(explicit)

    with pytest.raises(RuntimeError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "curve:\n  step: 0\n",
        "timer:\n  tick_interval_ms: -12\n",
        "canvas:\n  size: [0, 500]\n",
    ],
)
def test_non_positive_values_raise(text: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text(text, encoding="utf-8")
    set_config_path(explicit)

    with pytest.raises(ValueError):
        runtime_config()


def test_malformed_pair_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("canvas:\n  size: [1, 2, 3]\n", encoding="utf-8")
    set_config_path(explicit)

    with pytest.raises(RuntimeError):
        runtime_config()
