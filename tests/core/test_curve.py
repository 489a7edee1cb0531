"""core.curve の CurveModel / clamp_ratio をテスト。"""

from __future__ import annotations

import math

import pytest

from spiro.core.curve import (
    RATIO_MAX,
    RATIO_MIN,
    CurveModel,
    ShapeParameters,
    clamp_ratio,
    spirograph_point,
)


def test_at_t0_lies_on_x_axis() -> None:
    params = ShapeParameters(l=0.22, k=0.46, r=150.0)
    x, y = CurveModel().at(params, 0.0)
    # cos(0)=1, sin(0)=0 なので内円側の項も x にだけ効く。
    assert x == pytest.approx(150.0 * ((1.0 - 0.46) + 0.22 * 0.46))
    assert y == 0.0


def test_at_matches_closed_form() -> None:
    params = ShapeParameters(l=0.7, k=math.pi / 10, r=250.0)
    t = 1.234
    k, l, r = params.k, params.l, params.r
    expected_x = r * ((1 - k) * math.cos(t) + l * k * math.cos(t * ((1 - k) / k)))
    expected_y = r * ((1 - k) * math.sin(t) - l * k * math.sin(t * ((1 - k) / k)))
    x, y = CurveModel().at(params, t)
    assert x == pytest.approx(expected_x)
    assert y == pytest.approx(expected_y)


def test_at_is_deterministic() -> None:
    params = ShapeParameters(l=0.33, k=0.27, r=150.0)
    model = CurveModel()
    for t in (0.0, 0.15, 3.0, 1234.5):
        assert model.at(params, t) == model.at(params, t)
        assert model.at(params, t) == spirograph_point(params.l, params.k, params.r, t)


@pytest.mark.parametrize("l", [RATIO_MIN, 0.22, 0.5, RATIO_MAX])
@pytest.mark.parametrize("k", [RATIO_MIN, 0.1, 0.46, RATIO_MAX])
def test_points_stay_within_bounding_disk(l: float, k: float) -> None:
    params = ShapeParameters(l=l, k=k, r=150.0)
    model = CurveModel()
    bound = CurveModel.bounding_radius(params)
    for i in range(500):
        x, y = model.at(params, i * 0.15)
        assert math.hypot(x, y) <= bound + 1e-9


def test_with_l_and_with_k_keep_other_fields() -> None:
    params = ShapeParameters(l=0.22, k=0.46, r=150.0)
    assert params.with_l(0.5) == ShapeParameters(l=0.5, k=0.46, r=150.0)
    assert params.with_k(0.1) == ShapeParameters(l=0.22, k=0.1, r=150.0)
    # frozen なので元は変わらない
    assert params.l == 0.22


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.5, 0.5),
        (0.0, RATIO_MIN),
        (-3.0, RATIO_MIN),
        (1.0, RATIO_MAX),
        (42, RATIO_MAX),
        ("0.3", 0.3),
        (float("inf"), RATIO_MAX),
        (float("-inf"), RATIO_MIN),
    ],
)
def test_clamp_ratio(value: object, expected: float) -> None:
    assert clamp_ratio(value, fallback=0.2) == expected


@pytest.mark.parametrize("value", [float("nan"), None, "abc", object()])
def test_clamp_ratio_falls_back_for_non_numeric(value: object) -> None:
    assert clamp_ratio(value, fallback=0.2) == 0.2
