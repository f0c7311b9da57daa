"""Виджет показа готового водяного знака во весь экран.

Принципы:
- SRP: только представление растра, без логики построения.
"""
from __future__ import annotations

from typing import Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

# Ключевой цвет прозрачности окна (Windows, `-transparentcolor`)
KEY_COLOR = "#000000"


class OverlayView(ctk.CTkFrame):
    """Канва без рамок, на которой лежит одна картинка в точке (0, 0)."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, corner_radius=0, border_width=0, fg_color=KEY_COLOR, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, borderwidth=0, bg=KEY_COLOR)
        self._canvas.grid(row=0, column=0, sticky="nsew")

        # ссылка обязательна: иначе PhotoImage соберёт GC и картинка исчезнет
        self._tk_image: Optional[ImageTk.PhotoImage] = None

    def set_image(self, image: Image.Image) -> None:
        """Показывает RGB-кадр, подготовленный `PainterService.to_display`."""
        self._canvas.delete("all")
        self._tk_image = ImageTk.PhotoImage(image)
        self._canvas.create_image(0, 0, anchor="nw", image=self._tk_image)
