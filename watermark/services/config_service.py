"""Загрузка `WatermarkConfig` из YAML-файла.

Принципы:
- SRP: только чтение файла и приведение типов; инварианты проверяет сама модель.
- Отсутствующие ключи берут значения по умолчанию, неизвестные ключи — ошибка,
  чтобы опечатка в имени параметра не проходила молча.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from watermark.errors import ConfigError
from watermark.models.config import WatermarkConfig
from watermark.services.glyph_service import load_font_file
from watermark.services.painter_service import parse_hex_color

logger = logging.getLogger(__name__)

KNOWN_KEYS = frozenset(
    {
        "label",
        "skew_angle",
        "image_rotation",
        "font_size",
        "space_count",
        "spacing",
        "color",
        "alpha",
        "font_path",
    }
)


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} должен быть числом: {value!r}") from exc


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} должен быть целым числом: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ConfigError(f"{key} должен быть целым числом: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} должен быть целым числом: {value!r}") from exc


def _as_int_pair(value: Any, *, key: str) -> Tuple[int, int]:
    if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or len(value) != 2:
        raise ConfigError(f"{key} должен быть массивом [x, y]: {value!r}")
    return _as_int(value[0], key=f"{key}[0]"), _as_int(value[1], key=f"{key}[1]")


def parse_config(data: Dict[str, Any], base_dir: Optional[Path] = None) -> WatermarkConfig:
    """Строит `WatermarkConfig` из уже разобранного mapping.

    Args:
        data: Содержимое YAML (верхний уровень).
        base_dir: Каталог, относительно которого разрешается `font_path`.

    Raises:
        ConfigError: неизвестный ключ или некорректное значение.
        FileNotFoundError: если `font_path` не указывает на файл.
    """
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Неизвестные ключи конфигурации: {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    if data.get("label") is not None:
        kwargs["label"] = str(data["label"])
    for key in ("skew_angle", "image_rotation", "font_size"):
        if data.get(key) is not None:
            kwargs[key] = _as_float(data[key], key=key)
    for key in ("space_count", "alpha"):
        if data.get(key) is not None:
            kwargs[key] = _as_int(data[key], key=key)
    if data.get("spacing") is not None:
        kwargs["spacing_x"], kwargs["spacing_y"] = _as_int_pair(data["spacing"], key="spacing")
    if data.get("color") is not None:
        kwargs["color"] = parse_hex_color(data["color"])
    if data.get("font_path"):
        font_path = Path(str(data["font_path"])).expanduser()
        if not font_path.is_absolute() and base_dir is not None:
            font_path = base_dir / font_path
        kwargs["font_data"] = load_font_file(font_path)

    return WatermarkConfig(**kwargs)


def load_config(path: str | Path | None = None) -> WatermarkConfig:
    """Читает YAML-файл конфигурации; None — значения по умолчанию.

    Raises:
        FileNotFoundError: если файл не существует.
        ConfigError: если YAML не разбирается или содержит некорректные значения.
    """
    if path is None:
        return WatermarkConfig()

    config_path = Path(path)
    if not config_path.exists() or not config_path.is_file():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Не удалось разобрать YAML: {config_path}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Конфигурация должна быть mapping: {config_path}")

    config = parse_config(data, base_dir=config_path.parent)
    logger.info("Конфигурация загружена: %s", config_path)
    return config
