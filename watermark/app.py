"""Окно-оверлей: полноэкранное, поверх всех окон, без рамок и с общей альфой."""
from __future__ import annotations

import ctypes
import logging
import sys
from typing import Tuple

import customtkinter as ctk

from watermark.controllers.watermark_controller import WatermarkController
from watermark.models.config import WatermarkConfig
from watermark.ui.click_through import apply_click_through
from watermark.ui.overlay import KEY_COLOR, OverlayView

logger = logging.getLogger(__name__)


class WatermarkOverlayApp(ctk.CTk):
    def __init__(self, config: WatermarkConfig, username: str) -> None:
        super().__init__(fg_color=KEY_COLOR)
        self.title("Watermark")

        width, height = self.screen_size()
        self.overrideredirect(True)
        self.geometry(f"{width}x{height}+0+0")
        self.attributes("-topmost", True)
        self.attributes("-alpha", config.alpha / 255.0)
        if sys.platform == "win32":
            # чёрный фон окна становится полностью прозрачным
            self.attributes("-transparentcolor", KEY_COLOR)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._view = OverlayView(self)
        self._view.grid(row=0, column=0, sticky="nsew")

        self._controller = WatermarkController(config=config)
        painted = self._controller.render_painted(username, width, height)
        try:
            self._view.set_image(self._controller.painter_service.to_display(painted))
        finally:
            painted.release()

        self.bind("<Escape>", lambda _event: self.destroy())
        self._make_click_through()
        # без рамки окно само фокус не получает, а Escape нужен фокус
        self.focus_force()
        logger.info("Оверлей %dx%d показан", width, height)

    def screen_size(self) -> Tuple[int, int]:
        """Размер основного экрана в пикселях устройства."""
        return int(self.winfo_screenwidth()), int(self.winfo_screenheight())

    def _make_click_through(self) -> None:
        if sys.platform != "win32":
            logger.warning("Сквозные клики поддерживаются только в Windows; закрыть оверлей: Escape или двойной клик")
            self.bind("<Double-Button-1>", lambda _event: self.destroy())
            return
        # стили нужны окну верхнего уровня, а winfo_id даёт дочернее окно Tk
        self.update_idletasks()
        user32 = ctypes.windll.user32  # type: ignore[attr-defined]
        apply_click_through(user32.GetParent(self.winfo_id()), user32)
