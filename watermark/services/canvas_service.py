"""Синтез увеличенного холста с тайлами текста.

Принципы:
- SRP: сервис только раскладывает токен по сетке и делегирует отрисовку глифов.
- DIP: рендерер глифов передаётся снаружи (`GlyphRenderer`), что позволяет
  подменять его в тестах записывающей заглушкой.

Холст квадратный со стороной `ceil(sqrt(W² + H²) * 5/4)`: любой поворот целевого
прямоугольника остаётся внутри него после обрезки.
"""
from __future__ import annotations

import logging
import math
from typing import Iterator, Optional, Tuple

from watermark.errors import ConfigError
from watermark.models.config import WatermarkConfig, validate_spacing
from watermark.models.raster_image import RasterImage
from watermark.services.glyph_service import OPAQUE_BLACK, GlyphRenderer, PillowGlyphRenderer

logger = logging.getLogger(__name__)

# Увеличение шага тайлов (числитель, знаменатель); целочисленная арифметика
SPACING_SCALE = (4, 3)
CANVAS_MARGIN = (5, 4)


def canvas_side(target_width: int, target_height: int) -> int:
    """Сторона квадратного холста для целевого размера."""
    num, den = CANVAS_MARGIN
    return math.ceil(math.sqrt(target_width * target_width + target_height * target_height) * num / den)


def effective_spacing(spacing: int) -> int:
    """Шаг тайлов после увеличения на 4/3."""
    num, den = SPACING_SCALE
    return spacing * num // den


def rotate_point(x: float, y: float, rad: float) -> Tuple[float, float]:
    """Поворот точки вокруг начала координат."""
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


def tile_anchors(side: int, step_x: int, step_y: int, skew_degrees: float) -> Iterator[Tuple[int, int]]:
    """Позиции отрисовки токена на холсте стороны `side`.

    Сетка перебирается в расширенном диапазоне [-side/2, side*3/2) по обеим осям,
    каждая точка поворачивается на угол наклона и сдвигается в центр холста.
    Точки, попавшие вне [0, side), пропускаются.
    """
    if step_x <= 0 or step_y <= 0:
        raise ConfigError(f"Шаг тайлов должен быть положительным: ({step_x}, {step_y})")
    rad = skew_degrees * math.pi / 180.0
    half = side / 2
    start = -(side // 2)
    stop = side * 3 // 2
    for y in range(start, stop, step_y):
        for x in range(start, stop, step_x):
            rot_x, rot_y = rotate_point(float(x), float(y), rad)
            rot_x += half
            rot_y += half
            if 0 <= rot_x < side and 0 <= rot_y < side:
                yield int(rot_x), int(rot_y)


class CanvasService:
    def __init__(self, glyph_renderer: Optional[GlyphRenderer] = None) -> None:
        self._glyph_renderer = glyph_renderer

    def synthesize(
        self,
        config: WatermarkConfig,
        text: str,
        target_width: int,
        target_height: int,
    ) -> RasterImage:
        """Строит прозрачный холст и раскладывает по нему токен `text`.

        Args:
            config: Параметры водяного знака (наклон, шаг, шрифт).
            text: Токен, рисуемый в каждой позиции сетки.
            target_width: Ширина итогового изображения, px.
            target_height: Высота итогового изображения, px.

        Returns:
            Квадратный `RasterImage` со стороной `canvas_side(target_width, target_height)`.

        Raises:
            ValueError: если целевой размер не положителен.
            ConfigError: если шаг тайлов вырожден.
            FontLoadError: если шрифт из конфигурации не разбирается.
        """
        if target_width <= 0 or target_height <= 0:
            raise ValueError(f"Целевой размер должен быть положительным: {target_width}x{target_height}")
        # проверка до выделения холста и до любой отрисовки
        validate_spacing(config.spacing_x, config.spacing_y)
        step_x = effective_spacing(config.spacing_x)
        step_y = effective_spacing(config.spacing_y)

        renderer = self._glyph_renderer
        if renderer is None:
            renderer = PillowGlyphRenderer(config.font_data, config.font_size)

        side = canvas_side(target_width, target_height)
        canvas = RasterImage.transparent(side, side)

        draws = 0
        for anchor in tile_anchors(side, step_x, step_y, config.skew_angle):
            renderer.draw_text(canvas, anchor, text, OPAQUE_BLACK)
            draws += 1

        logger.debug("Холст %dx%d, шаг (%d, %d), отрисовок: %d", side, side, step_x, step_y, draws)
        return canvas
