from __future__ import annotations

import pytest

from watermark.services import identity_service
from watermark.services.identity_service import build_text_token, extract_username


@pytest.mark.parametrize(
    "full, short",
    [
        ("CORP\\alice", "alice"),
        ("CORP\\SUB\\bob", "bob"),
        ("carol@corp.example", "carol"),
        ("dave", "dave"),
        ("", ""),
    ],
)
def test_extract_username(full: str, short: str) -> None:
    assert extract_username(full) == short


def test_build_text_token() -> None:
    assert build_text_token("CompanyName", "CORP\\alice", 5) == "CompanyName alice     "
    assert build_text_token("ACME", "bob@x", 0) == "ACME bob"


def test_current_username_uses_getpass(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(identity_service.getpass, "getuser", lambda: "DOMAIN\\eve")
    assert identity_service.current_username() == "DOMAIN\\eve"
