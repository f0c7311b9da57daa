"""Имя пользователя и текст водяного знака."""
from __future__ import annotations

import getpass


def extract_username(full_username: str) -> str:
    """Убирает домен: `DOMAIN\\user` -> `user`, `user@domain` -> `user`."""
    if "\\" in full_username:
        return full_username.rsplit("\\", 1)[1]
    if "@" in full_username:
        return full_username.split("@", 1)[0]
    return full_username


def current_username() -> str:
    return getpass.getuser()


def build_text_token(label: str, username: str, space_count: int) -> str:
    """Токен, повторяемый в каждом тайле: метка, короткое имя и пробелы-разделители."""
    return f"{label} {extract_username(username)}{' ' * space_count}"
