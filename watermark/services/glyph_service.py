"""Отрисовка глифов текста в растр через FreeType (Pillow).

Принципы:
- ISP: синтезатору нужен один узкий метод `draw_text`, описанный протоколом `GlyphRenderer`.
- Ошибки разбора шрифта переводятся в `FontLoadError` сразу при создании рендерера,
  до выделения холста.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Protocol, Tuple

from PIL import ImageDraw, ImageFont

from watermark.errors import FontLoadError
from watermark.models.raster_image import Pixel, RasterImage

logger = logging.getLogger(__name__)

OPAQUE_BLACK: Pixel = (0, 0, 0, 255)


class GlyphRenderer(Protocol):
    def draw_text(self, raster: RasterImage, anchor: Tuple[int, int], text: str, fill: Pixel) -> None:
        """Рисует `text` с базовой линией, начинающейся в `anchor`; всё вне растра отсекается."""
        ...


class PillowGlyphRenderer:
    """Рендерер на основе `ImageFont.truetype` (72 DPI: пункт равен пикселю)."""

    def __init__(self, font_data: Optional[bytes], font_size: float) -> None:
        self._font = load_font(font_data, font_size)

    def draw_text(self, raster: RasterImage, anchor: Tuple[int, int], text: str, fill: Pixel) -> None:
        draw = ImageDraw.Draw(raster.pil_image)
        # "ls": left + baseline, как точка начала строки во FreeType
        draw.text(anchor, text, font=self._font, fill=fill, anchor="ls")


def load_font(font_data: Optional[bytes], font_size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Разбирает шрифт из байтов; None — встроенный шрифт Pillow.

    Raises:
        FontLoadError: если данные не являются поддерживаемым шрифтом.
    """
    if font_data is None:
        logger.debug("Используется встроенный шрифт Pillow, кегль %s", font_size)
        return ImageFont.load_default(size=font_size)
    try:
        return ImageFont.truetype(BytesIO(font_data), size=font_size)
    except (OSError, ValueError) as exc:
        raise FontLoadError(f"Не удалось разобрать шрифт ({len(font_data)} байт)") from exc


def load_font_file(path: str | Path) -> bytes:
    """Читает файл шрифта целиком.

    Raises:
        FileNotFoundError: если путь не существует или не указывает на файл.
    """
    font_path = Path(path)
    if not font_path.exists() or not font_path.is_file():
        raise FileNotFoundError(f"Файл шрифта не найден: {font_path}")
    return font_path.read_bytes()
