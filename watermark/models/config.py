"""Параметры отрисовки водяного знака.

Принципы:
- SRP: только структура данных и проверка инвариантов.
- Неизменяемость (`frozen=True`): значение строится один раз и передаётся явно
  в синтезатор и ресемплер вместо глобального состояния.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from watermark.errors import ConfigError

DEFAULT_LABEL = "CompanyName"


@dataclass(frozen=True)
class WatermarkConfig:
    """Неизменяемые параметры водяного знака.

    Fields:
        skew_angle: Наклон текста внутри тайла, градусы (отрицательный — наклон вправо).
        image_rotation: Поворот всего холста, градусы (0–360).
        font_size: Кегль, пункты (72 DPI, т.е. пункт = пиксель).
        space_count: Число пробелов после имени пользователя в токене.
        spacing_x: Шаг тайлов по горизонтали, px (до увеличения на 4/3).
        spacing_y: Шаг тайлов по вертикали, px (до увеличения на 4/3).
        color: Цвет вывода (R, G, B).
        alpha: Альфа вывода (0–255).
        label: Префикс текста, например название компании.
        font_data: Содержимое файла шрифта; None — встроенный шрифт Pillow.
    """
    skew_angle: float = 0.0
    image_rotation: float = 320.0
    font_size: float = 20.0
    space_count: int = 5
    spacing_x: int = 250
    spacing_y: int = 125
    color: Tuple[int, int, int] = (255, 255, 255)
    alpha: int = 7
    label: str = DEFAULT_LABEL
    font_data: Optional[bytes] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        validate_spacing(self.spacing_x, self.spacing_y)
        for name in ("skew_angle", "image_rotation", "font_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigError(f"{name} должен быть конечным числом: {value!r}")
        if self.font_size <= 0:
            raise ConfigError(f"font_size должен быть положительным: {self.font_size!r}")
        if not _is_int(self.space_count) or self.space_count < 0:
            raise ConfigError(f"space_count должен быть целым >= 0: {self.space_count!r}")
        if not _is_int(self.alpha) or not 0 <= self.alpha <= 255:
            raise ConfigError(f"alpha должна быть целым в диапазоне 0–255: {self.alpha!r}")
        if (
            not isinstance(self.color, tuple)
            or len(self.color) != 3
            or any(not _is_int(c) or not 0 <= c <= 255 for c in self.color)
        ):
            raise ConfigError(f"color должен быть тройкой (R, G, B) 0–255: {self.color!r}")

    @property
    def spacing(self) -> Tuple[int, int]:
        return self.spacing_x, self.spacing_y


def validate_spacing(spacing_x: int, spacing_y: int) -> None:
    """Шаг тайлинга обязан быть положительным целым, иначе цикл не продвигается.

    Raises:
        ConfigError: если шаг не целый или не положителен.
    """
    for name, value in (("spacing_x", spacing_x), ("spacing_y", spacing_y)):
        if not _is_int(value):
            raise ConfigError(f"{name} должен быть целым числом: {value!r}")
        if value <= 0:
            raise ConfigError(f"{name} должен быть положительным: {value!r}")


def _is_int(value: object) -> bool:
    # bool — подкласс int, но как число конфигурации не годится
    return isinstance(value, int) and not isinstance(value, bool)
