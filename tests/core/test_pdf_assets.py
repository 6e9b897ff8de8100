from __future__ import annotations

import logging
from pathlib import Path

import pytest
import reportlab

from app.core.pdf_assets import (
    CompanionFonts,
    clear_asset_cache,
    load_font,
    resolve_asset,
    resolve_companion_fonts,
    resolve_logo,
)

VERA_TTF = Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"


@pytest.fixture(autouse=True)
def _fresh_asset_cache():
    clear_asset_cache()
    yield
    clear_asset_cache()


def test_resolve_asset_returns_first_existing_candidate(tmp_path) -> None:
    second = tmp_path / "logotchad.png"
    third = tmp_path / "logo.jpg"
    second.write_bytes(b"png")
    third.write_bytes(b"jpg")

    resolved = resolve_asset([tmp_path / "logo.png", second, third])

    assert resolved == second


def test_resolve_asset_is_memoized_until_cache_cleared(tmp_path) -> None:
    first = tmp_path / "logo.png"
    fallback = tmp_path / "logo.jpg"
    fallback.write_bytes(b"jpg")
    candidates = [first, fallback]

    assert resolve_asset(candidates) == fallback

    first.write_bytes(b"png")
    assert resolve_asset(candidates) == fallback

    clear_asset_cache()
    assert resolve_asset(candidates) == first


def test_resolve_asset_returns_none_when_nothing_exists(tmp_path) -> None:
    assert resolve_asset([tmp_path / "a.png", tmp_path / "b.png"]) is None


def test_resolve_logo_skips_svg_with_warning(tmp_path, caplog) -> None:
    svg = tmp_path / "logo.svg"
    svg.write_text("<svg/>", encoding="utf-8")
    caplog.set_level(logging.WARNING)

    assert resolve_logo([tmp_path / "logo.png", svg]) is None
    assert "pdf_logo_format_unsupported" in caplog.text


def test_resolve_logo_missing_is_logged(tmp_path, caplog) -> None:
    caplog.set_level(logging.WARNING)

    assert resolve_logo([tmp_path / "logo.png"]) is None
    assert "pdf_logo_missing" in caplog.text


def test_load_font_rejects_corrupt_file(tmp_path, caplog) -> None:
    broken = tmp_path / "Broken.ttf"
    broken.write_bytes(b"not a font")
    caplog.set_level(logging.WARNING)

    assert load_font(broken, "BrokenCompanion") is None
    assert "pdf_font_register_failed" in caplog.text


def test_companion_fonts_missing_degrades_to_none(tmp_path, caplog) -> None:
    caplog.set_level(logging.WARNING)

    fonts = resolve_companion_fonts(
        regular_candidates=[tmp_path / "Amiri-Regular.ttf"],
        bold_candidates=[tmp_path / "Amiri-Bold.ttf"],
    )

    assert fonts is None
    assert "pdf_companion_font_missing" in caplog.text


def test_companion_bold_falls_back_to_regular(tmp_path, caplog) -> None:
    caplog.set_level(logging.WARNING)

    fonts = resolve_companion_fonts(
        regular_candidates=[tmp_path / "Amiri-Regular.ttf", VERA_TTF],
        bold_candidates=[tmp_path / "Amiri-Bold.ttf"],
    )

    assert isinstance(fonts, CompanionFonts)
    assert fonts.bold == fonts.regular
    assert "pdf_companion_font_bold_fallback" in caplog.text
