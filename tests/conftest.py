from __future__ import annotations

from typing import List, Tuple

import pytest

from watermark.models.raster_image import Pixel, RasterImage


class RecordingRenderer:
    """Заглушка рендерера: запоминает вызовы и ничего не рисует."""

    def __init__(self) -> None:
        self.calls: List[Tuple[Tuple[int, int], str, Pixel]] = []
        self.sizes: List[Tuple[int, int]] = []

    def draw_text(self, raster: RasterImage, anchor: Tuple[int, int], text: str, fill: Pixel) -> None:
        self.calls.append((anchor, text, fill))
        self.sizes.append(raster.size)

    @property
    def anchors(self) -> List[Tuple[int, int]]:
        return [anchor for anchor, _, _ in self.calls]


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()
