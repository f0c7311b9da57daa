from __future__ import annotations

import math

import pytest

from watermark.errors import ConfigError, FontLoadError
from watermark.models.config import WatermarkConfig
from watermark.services.canvas_service import (
    CanvasService,
    canvas_side,
    effective_spacing,
    rotate_point,
    tile_anchors,
)


def test_canvas_side_formula() -> None:
    assert canvas_side(1920, 1080) == 2754
    assert canvas_side(200, 200) == 354
    assert canvas_side(3, 4) == 7  # 5 * 1.25 = 6.25


def test_effective_spacing_uses_integer_four_thirds() -> None:
    assert effective_spacing(250) == 333
    assert effective_spacing(125) == 166
    assert effective_spacing(100) == 133
    assert effective_spacing(1) == 1


def test_rotate_point_quarter_turn() -> None:
    x, y = rotate_point(1.0, 0.0, math.pi / 2)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_zero_skew_anchors_form_grid(recorder) -> None:
    cfg = WatermarkConfig(skew_angle=0.0, spacing_x=100, spacing_y=100)
    canvas = CanvasService(recorder).synthesize(cfg, "TOKEN", 200, 200)

    assert canvas.size == (354, 354)
    # start = -177, шаг 133, сдвиг +177 -> 0, 133, 266 по каждой оси
    expected = [(x, y) for y in (0, 133, 266) for x in (0, 133, 266)]
    assert recorder.anchors == expected
    assert all(text == "TOKEN" for _, text, _ in recorder.calls)
    assert all(fill == (0, 0, 0, 255) for _, _, fill in recorder.calls)
    assert set(recorder.sizes) == {(354, 354)}


@pytest.mark.parametrize("skew", [-30.0, 17.5, 45.0, 200.0])
def test_no_draw_outside_canvas(recorder, skew: float) -> None:
    cfg = WatermarkConfig(skew_angle=skew, spacing_x=40, spacing_y=30)
    canvas = CanvasService(recorder).synthesize(cfg, "T", 120, 90)
    side = canvas.width

    assert recorder.calls
    for x, y in recorder.anchors:
        assert 0 <= x < side
        assert 0 <= y < side

    # независимый перебор: число вызовов равно числу точек, попавших в холст
    rad = skew * math.pi / 180.0
    step_x, step_y = effective_spacing(40), effective_spacing(30)
    inside = 0
    total = 0
    for y in range(-(side // 2), side * 3 // 2, step_y):
        for x in range(-(side // 2), side * 3 // 2, step_x):
            total += 1
            rx = x * math.cos(rad) - y * math.sin(rad) + side / 2
            ry = x * math.sin(rad) + y * math.cos(rad) + side / 2
            if 0 <= rx < side and 0 <= ry < side:
                inside += 1
    assert len(recorder.calls) == inside
    assert inside < total


def test_canvas_starts_transparent(recorder) -> None:
    canvas = CanvasService(recorder).synthesize(WatermarkConfig(spacing_x=50, spacing_y=50), "T", 40, 30)
    assert not canvas.to_array().any()


def test_zero_spacing_rejected_before_any_draw(recorder) -> None:
    cfg = WatermarkConfig(spacing_x=100, spacing_y=100)
    # обход __post_init__, как у значения, собранного в обход конструктора
    object.__setattr__(cfg, "spacing_y", 0)
    with pytest.raises(ConfigError):
        CanvasService(recorder).synthesize(cfg, "T", 100, 100)
    assert recorder.calls == []


def test_tile_anchors_rejects_zero_step() -> None:
    with pytest.raises(ConfigError):
        list(tile_anchors(100, 0, 10, 0.0))


@pytest.mark.parametrize("w, h", [(0, 10), (10, -1)])
def test_invalid_target_size(recorder, w: int, h: int) -> None:
    with pytest.raises(ValueError):
        CanvasService(recorder).synthesize(WatermarkConfig(), "T", w, h)


def test_unparseable_font_is_fatal() -> None:
    cfg = WatermarkConfig(font_data=b"definitely not a font")
    with pytest.raises(FontLoadError):
        CanvasService().synthesize(cfg, "T", 50, 50)


def test_real_glyphs_leave_coverage() -> None:
    cfg = WatermarkConfig(skew_angle=-20.0, spacing_x=60, spacing_y=40, font_size=16)
    canvas = CanvasService().synthesize(cfg, "CompanyName alice", 160, 120)
    alpha = canvas.to_array()[..., 3]
    assert alpha.any()
    # сглаживание даёт промежуточные значения покрытия
    assert ((alpha > 0) & (alpha < 255)).any()
