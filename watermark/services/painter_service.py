"""Подготовка итогового растра к показу: бинаризация покрытия.

Любой пиксель с ненулевой альфой считается «знак есть» и закрашивается одним цветом
и одной альфой из конфигурации; градиент сглаживания глифов при этом отбрасывается.
"""
from __future__ import annotations

import logging
import re
from typing import Tuple

import numpy as np
from PIL import Image

from watermark.errors import ConfigError
from watermark.models.raster_image import RasterImage

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def parse_hex_color(text: str) -> Tuple[int, int, int]:
    """`"ff0000"` (или `"#ff0000"`) -> (255, 0, 0).

    Raises:
        ConfigError: если строка не является шестизначным hex-цветом.
    """
    match = _HEX_COLOR.match(str(text).strip())
    if match is None:
        raise ConfigError(f"Цвет должен быть в формате RRGGBB: {text!r}")
    value = match.group(1)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class PainterService:
    def binarize(self, final: RasterImage, color: Tuple[int, int, int], alpha: int) -> RasterImage:
        """Пиксели с альфой > 0 становятся (R, G, B, alpha), остальные — прозрачными."""
        mask = final.alpha_mask()
        out = np.zeros((final.height, final.width, 4), dtype=np.uint8)
        out[mask] = (color[0], color[1], color[2], alpha)
        return RasterImage.from_array(out)

    def coverage_ratio(self, image: RasterImage) -> float:
        """Доля пикселей, занятых водяным знаком (0..1)."""
        mask = image.alpha_mask()
        if mask.size == 0:
            return 0.0
        return float(mask.mean())

    def to_display(self, painted: RasterImage, key_color: Tuple[int, int, int] = (0, 0, 0)) -> Image.Image:
        """RGB-кадр для окна-оверлея: фон закрашен ключевым цветом прозрачности.

        Прозрачность окна задаётся целиком (альфа окна), поэтому попиксельная альфа
        здесь не нужна: остаётся только цвет знака или ключевой цвет.
        Пиксели знака, совпавшие с ключевым цветом, сдвигаются на единицу
        по каждому каналу, иначе окно сделало бы их прозрачными.
        """
        arr = painted.to_array()
        rgb = np.empty((painted.height, painted.width, 3), dtype=np.uint8)
        rgb[...] = key_color
        mask = arr[..., 3] > 0
        rgb[mask] = arr[mask][:, :3]

        key = np.asarray(key_color, dtype=np.uint8)
        clash = mask & np.all(rgb == key, axis=-1)
        if clash.any():
            rgb[clash] = np.where(key < 255, key + 1, key - 1).astype(np.uint8)
            logger.debug("Цвет знака совпал с ключевым, сдвинуто пикселей: %d", int(clash.sum()))
        return Image.fromarray(rgb)
