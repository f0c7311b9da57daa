from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np
from PIL import Image

from watermark.controllers.watermark_controller import WatermarkController
from watermark.models.config import WatermarkConfig
from watermark.models.raster_image import RasterImage
from watermark.services.canvas_service import CanvasService


class _KeepingCanvasService(CanvasService):
    def __init__(self) -> None:
        super().__init__()
        self.canvases: List[RasterImage] = []

    def synthesize(self, config, text, target_width, target_height):
        canvas = super().synthesize(config, text, target_width, target_height)
        self.canvases.append(canvas)
        return canvas


def _near(mask: np.ndarray, row: int, col: int) -> bool:
    return bool(mask[max(row - 1, 0) : row + 2, max(col - 1, 0) : col + 2].any())


def test_render_releases_canvas_and_keeps_target_size() -> None:
    service = _KeepingCanvasService()
    controller = WatermarkController(
        config=WatermarkConfig(spacing_x=60, spacing_y=40), canvas_service=service
    )
    final = controller.render("CORP\\alice", 120, 80)

    assert final.size == (120, 80)
    assert final.alpha_mask().any()
    assert len(service.canvases) == 1
    assert service.canvases[0].released


def test_text_for_strips_domain() -> None:
    controller = WatermarkController(config=WatermarkConfig(label="ACME", space_count=3))
    assert controller.text_for("bob@corp") == "ACME bob   "


def test_render_painted_is_binary() -> None:
    cfg = WatermarkConfig(spacing_x=60, spacing_y=40, color=(255, 0, 0), alpha=9)
    painted = WatermarkController(config=cfg).render_painted("alice", 100, 70).to_array()

    present = painted[..., 3] > 0
    assert present.any()
    assert (painted[present] == (255, 0, 0, 9)).all()
    assert not painted[~present].any()


def test_ninety_degree_rotation_rotates_coverage() -> None:
    base = dict(skew_angle=0.0, spacing_x=100, spacing_y=100)
    m0 = WatermarkController(config=WatermarkConfig(image_rotation=0.0, **base)).render("tester", 200, 200).alpha_mask()
    m90 = WatermarkController(config=WatermarkConfig(image_rotation=90.0, **base)).render("tester", 200, 200).alpha_mask()

    assert m0.shape == m90.shape == (200, 200)
    assert m0.any() and m90.any()

    # при повороте на 90° пиксель (x, y) берётся из базового (y, 200 - x) с точностью ±1
    ys, xs = np.nonzero(m90)
    for y, x in zip(ys, xs):
        row, col = 200 - x, y
        if row > 199:
            continue
        assert _near(m0, row, col)

    rows, cols = np.nonzero(m0)
    for row, col in zip(rows, cols):
        if row < 1:
            continue
        assert _near(m90, col, 200 - row)


def test_save_png(tmp_path: Path) -> None:
    controller = WatermarkController(config=WatermarkConfig(spacing_x=50, spacing_y=50))
    out = controller.save_png(tmp_path / "nested" / "wm.png", "alice", 64, 48)
    assert out.exists()
    with Image.open(out) as img:
        assert img.size == (64, 48)
        assert img.mode == "RGBA"


def test_banded_controller_matches_single_pass() -> None:
    cfg = WatermarkConfig(spacing_x=50, spacing_y=40, image_rotation=25.0)
    whole = WatermarkController(config=cfg).render("alice", 90, 60).to_array()
    banded = WatermarkController(config=cfg, band_height=8).render("alice", 90, 60).to_array()
    np.testing.assert_array_equal(whole, banded)
