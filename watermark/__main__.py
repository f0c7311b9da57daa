"""Точка входа: `python -m watermark render|show`."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from watermark.errors import ConfigError, FontLoadError
from watermark.services.config_service import load_config
from watermark.services.identity_service import current_username

logger = logging.getLogger("watermark")


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"ожидалось положительное число: {text}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="watermark", description="Полноэкранный текстовый водяной знак.")
    parser.add_argument("-v", "--verbose", action="store_true", help="подробный лог (DEBUG)")
    parser.add_argument("--config", default=None, help="путь к config.yaml")
    parser.add_argument("--user", default=None, help="имя пользователя (по умолчанию текущее)")

    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="сохранить водяной знак в PNG")
    render.add_argument("output", help="путь к PNG")
    render.add_argument("--width", type=_positive_int, default=1920)
    render.add_argument("--height", type=_positive_int, default=1080)
    render.add_argument("--raw", action="store_true", help="сохранить покрытие глифов без бинаризации")

    sub.add_parser("show", help="показать оверлей на экране")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Создаёт водяной знак по аргументам командной строки и возвращает код выхода."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        username = args.user if args.user is not None else current_username()

        if args.command == "render":
            from watermark.controllers.watermark_controller import WatermarkController

            controller = WatermarkController(config=config)
            controller.save_png(args.output, username, args.width, args.height, painted=not args.raw)
            return 0

        # GUI-зависимости нужны только для показа
        from watermark.app import WatermarkOverlayApp

        app = WatermarkOverlayApp(config, username)
        app.mainloop()
        return 0
    except (ConfigError, FontLoadError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
