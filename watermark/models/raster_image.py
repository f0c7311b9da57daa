"""Растровое RGBA-изображение с явным владением буфером.

Принципы:
- SRP: только хранение пикселей и доступ к ним, без логики синтеза.
- Буфер (`PIL.Image.Image` в режиме RGBA) принадлежит объекту целиком;
  размеры фиксируются при создании.
- Доступ к пикселям проверяет границы; освобождение буфера детерминировано (`release`).
"""
from __future__ import annotations

from typing import Tuple

import numpy as np
from PIL import Image

Pixel = Tuple[int, int, int, int]

TRANSPARENT: Pixel = (0, 0, 0, 0)


class RasterImage:
    """Двумерная сетка RGBA-пикселей (row-major)."""

    def __init__(self, pil_image: Image.Image) -> None:
        if pil_image.mode != "RGBA":
            raise ValueError(f"Ожидался режим RGBA, получен: {pil_image.mode}")
        self._image: Image.Image | None = pil_image

    # ---- Constructors ----
    @classmethod
    def transparent(cls, width: int, height: int) -> "RasterImage":
        """Создаёт изображение, все пиксели которого полностью прозрачны.

        Raises:
            ValueError: если одна из сторон не положительна.
            MemoryError: если буфер не удалось выделить.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Размеры должны быть положительными: {width}x{height}")
        return cls(Image.new("RGBA", (int(width), int(height)), TRANSPARENT))

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "RasterImage":
        """Оборачивает массив формы (H, W, 4) типа uint8 (данные копируются)."""
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Ожидался массив (H, W, 4), получен: {arr.shape}")
        # fromarray может разделять память с массивом; copy() отвязывает буфер
        return cls(Image.fromarray(np.ascontiguousarray(arr, dtype=np.uint8)).copy())

    # ---- Properties ----
    @property
    def pil_image(self) -> Image.Image:
        if self._image is None:
            raise RuntimeError("Буфер изображения уже освобождён")
        return self._image

    @property
    def width(self) -> int:
        return self.pil_image.width

    @property
    def height(self) -> int:
        return self.pil_image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.pil_image.size

    @property
    def released(self) -> bool:
        return self._image is None

    # ---- Pixel access ----
    def contains(self, x: int, y: int) -> bool:
        """Лежит ли точка внутри [0, width) x [0, height)."""
        w, h = self.size
        return 0 <= x < w and 0 <= y < h

    def get_pixel(self, x: int, y: int) -> Pixel:
        self._check_bounds(x, y)
        return tuple(self.pil_image.getpixel((x, y)))  # type: ignore[return-value]

    def set_pixel(self, x: int, y: int, rgba: Pixel) -> None:
        self._check_bounds(x, y)
        self.pil_image.putpixel((x, y), tuple(int(c) for c in rgba))

    def to_array(self) -> np.ndarray:
        """Возвращает копию пикселей как массив (H, W, 4) uint8."""
        return np.array(self.pil_image, dtype=np.uint8)

    def alpha_mask(self) -> np.ndarray:
        """Булева маска (H, W): True там, где альфа ненулевая."""
        return np.asarray(self.pil_image.getchannel("A"), dtype=np.uint8) > 0

    # ---- Lifetime ----
    def release(self) -> None:
        """Освобождает буфер; повторный вызов безопасен."""
        if self._image is not None:
            self._image.close()
            self._image = None

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise IndexError(f"Пиксель ({x}, {y}) вне изображения {self.width}x{self.height}")

    def __repr__(self) -> str:
        if self._image is None:
            return "RasterImage(released)"
        return f"RasterImage({self.width}x{self.height})"
