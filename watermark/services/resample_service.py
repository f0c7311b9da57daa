"""Поворот холста с обрезкой до целевого размера (обратное отображение).

Принципы:
- Перебираются пиксели назначения, а не источника: каждому пикселю результата
  соответствует ровно одна запись, пропусков внутри границ нет.
- Выборка ближайшая с отбрасыванием дробной части (без интерполяции).
- Векторизация через numpy по полосам строк; полосы не пересекаются,
  а источник только читается.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np

from watermark.models.raster_image import RasterImage

logger = logging.getLogger(__name__)


def inverse_map(
    source_size: Tuple[int, int],
    rotation_degrees: float,
    target_width: int,
    target_height: int,
    row_start: int = 0,
    row_stop: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Координаты источника для строк [row_start, row_stop) результата.

    Возвращает пару массивов float64 формы (rows, target_width):
    `src_x = dx*cos(-a) - dy*sin(-a) + cx`, `src_y = dx*sin(-a) + dy*cos(-a) + cy`,
    где (dx, dy) — смещение пикселя от центра результата.
    """
    if row_stop is None:
        row_stop = target_height
    src_w, src_h = source_size
    rad = rotation_degrees * math.pi / 180.0
    cos_a = math.cos(-rad)
    sin_a = math.sin(-rad)
    cx, cy = src_w / 2, src_h / 2
    ncx, ncy = target_width / 2, target_height / 2

    dx = np.arange(target_width, dtype=np.float64) - ncx
    dy = np.arange(row_start, row_stop, dtype=np.float64) - ncy
    dx, dy = np.meshgrid(dx, dy)

    src_x = dx * cos_a - dy * sin_a + cx
    src_y = dx * sin_a + dy * cos_a + cy
    return src_x, src_y


class ResampleService:
    def resample(
        self,
        canvas: RasterImage,
        rotation_degrees: float,
        target_width: int,
        target_height: int,
        band_height: Optional[int] = None,
    ) -> RasterImage:
        """Поворачивает `canvas` на `rotation_degrees` и обрезает до целевого размера.

        Args:
            canvas: Источник, только чтение.
            rotation_degrees: Угол поворота, градусы.
            target_width: Ширина результата, px.
            target_height: Высота результата, px.
            band_height: Высота полосы строк за один проход; None — все строки сразу.

        Returns:
            Новый `RasterImage` ровно `target_width x target_height`; пиксели,
            отображённые за пределы источника, остаются прозрачными.

        Raises:
            ValueError: если целевой размер или высота полосы не положительны.
        """
        if target_width <= 0 or target_height <= 0:
            raise ValueError(f"Целевой размер должен быть положительным: {target_width}x{target_height}")
        if band_height is None:
            band_height = target_height
        if band_height <= 0:
            raise ValueError(f"Высота полосы должна быть положительной: {band_height}")

        src = canvas.to_array()
        src_h, src_w = src.shape[:2]
        dst = np.zeros((target_height, target_width, 4), dtype=np.uint8)

        for row_start in range(0, target_height, band_height):
            row_stop = min(row_start + band_height, target_height)
            src_x, src_y = inverse_map((src_w, src_h), rotation_degrees, target_width, target_height, row_start, row_stop)
            inside = (src_x >= 0) & (src_x < src_w) & (src_y >= 0) & (src_y < src_h)
            # src >= 0 внутри маски, поэтому astype (усечение) совпадает с floor
            ix = src_x[inside].astype(np.intp)
            iy = src_y[inside].astype(np.intp)
            dst[row_start:row_stop][inside] = src[iy, ix]

        logger.debug(
            "Ресемплинг %dx%d -> %dx%d, угол %.2f°",
            src_w, src_h, target_width, target_height, rotation_degrees,
        )
        return RasterImage.from_array(dst)
