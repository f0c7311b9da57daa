"""Исключения приложения водяного знака.

Принципы:
- Узкая иерархия: одна база и по классу на каждую фатальную причину.
- `ConfigError` наследует `ValueError`, чтобы вызывающий код мог ловить его как обычную ошибку значения.
"""
from __future__ import annotations


class WatermarkError(Exception):
    """Базовая ошибка построения водяного знака."""


class ConfigError(WatermarkError, ValueError):
    """Некорректная конфигурация (шаг тайлинга, альфа, цвет, структура YAML)."""


class FontLoadError(WatermarkError):
    """Данные шрифта не удалось разобрать: отрисовать водяной знак невозможно."""
