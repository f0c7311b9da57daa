"""Сквозные клики для окна-оверлея (Win32).

Окно получает расширенные стили:
- WS_EX_LAYERED: окно со слоем, для которого работают альфа и цвет-ключ;
- WS_EX_TRANSPARENT: мышь проходит сквозь окно к окнам под ним;
- WS_EX_TOOLWINDOW: окна нет на панели задач и в Alt+Tab.

Модуль не зависит от tkinter: на вход нужен только дескриптор окна.
"""
from __future__ import annotations

import ctypes
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

GWL_EXSTYLE = -20
WS_EX_LAYERED = 0x00080000
WS_EX_TRANSPARENT = 0x00000020
WS_EX_TOOLWINDOW = 0x00000080

CLICK_THROUGH_FLAGS = WS_EX_LAYERED | WS_EX_TRANSPARENT | WS_EX_TOOLWINDOW


def click_through_style(style: int) -> int:
    """Добавляет к расширенному стилю флаги сквозного окна, прочие биты не трогает."""
    return style | CLICK_THROUGH_FLAGS


def apply_click_through(hwnd: int, user32: Optional[Any] = None) -> int:
    """Делает окно `hwnd` прозрачным для мыши и убирает его с панели задач.

    Args:
        hwnd: дескриптор окна верхнего уровня.
        user32: объект с функциями `GetWindowLongW`/`SetWindowLongW`;
            по умолчанию `ctypes.windll.user32` (есть только в Windows).

    Returns:
        Установленное значение расширенного стиля.
    """
    if user32 is None:
        user32 = ctypes.windll.user32  # type: ignore[attr-defined]
    style = click_through_style(user32.GetWindowLongW(hwnd, GWL_EXSTYLE))
    user32.SetWindowLongW(hwnd, GWL_EXSTYLE, style)
    logger.debug("Окну %#x заданы стили 0x%08X", hwnd, style)
    return style
