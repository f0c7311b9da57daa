"""Контроллер построения водяного знака: оркестрация сервисов.

SOLID:
- SRP: класс только связывает сервисы в конвейер, не содержит пиксельной логики.
- DIP: сервисы передаются полями dataclass и подменяются в тестах.
Clean Code:
- Увеличенный холст освобождается сразу после ресемплинга, а не «когда-нибудь».
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from watermark.models.config import WatermarkConfig
from watermark.models.raster_image import RasterImage
from watermark.services.canvas_service import CanvasService
from watermark.services.identity_service import build_text_token
from watermark.services.painter_service import PainterService
from watermark.services.resample_service import ResampleService

logger = logging.getLogger(__name__)


@dataclass
class WatermarkController:
    """Конвейер: токен -> холст -> поворот с обрезкой -> бинаризация.

    Ответственности:
    - Построение текста из метки и имени пользователя.
    - Синтез холста через `CanvasService` и ресемплинг через `ResampleService`.
    - Детерминированное освобождение холста.
    - Покраска результата через `PainterService` и сохранение в PNG.
    """
    config: WatermarkConfig
    canvas_service: CanvasService = field(default_factory=CanvasService)
    resample_service: ResampleService = field(default_factory=ResampleService)
    painter_service: PainterService = field(default_factory=PainterService)
    band_height: Optional[int] = None

    def text_for(self, username: str) -> str:
        return build_text_token(self.config.label, username, self.config.space_count)

    def render(self, username: str, width: int, height: int) -> RasterImage:
        """Итоговый растр `width x height` с повёрнутыми тайлами (альфа = покрытие глифов)."""
        text = self.text_for(username)
        canvas = self.canvas_service.synthesize(self.config, text, width, height)
        try:
            final = self.resample_service.resample(
                canvas, self.config.image_rotation, width, height, band_height=self.band_height
            )
        finally:
            canvas.release()
        return final

    def render_painted(self, username: str, width: int, height: int) -> RasterImage:
        """Растр, готовый к показу: один цвет и одна альфа из конфигурации."""
        final = self.render(username, width, height)
        try:
            painted = self.painter_service.binarize(final, self.config.color, self.config.alpha)
        finally:
            final.release()
        logger.info(
            "Водяной знак %dx%d построен, покрытие %.1f%%",
            width, height, 100.0 * self.painter_service.coverage_ratio(painted),
        )
        return painted

    def save_png(self, path: str | Path, username: str, width: int, height: int, painted: bool = True) -> Path:
        """Строит водяной знак и сохраняет его в PNG.

        Args:
            path: Куда сохранить файл; родительские каталоги создаются.
            username: Полное имя пользователя (домен отбрасывается).
            width: Ширина, px.
            height: Высота, px.
            painted: True — сохранить бинаризованный растр, False — «сырое» покрытие.

        Returns:
            Путь к сохранённому файлу.
        """
        out_path = Path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        image = self.render_painted(username, width, height) if painted else self.render(username, width, height)
        try:
            image.pil_image.save(out_path, format="PNG")
        finally:
            image.release()
        logger.info("Сохранено: %s", out_path)
        return out_path
