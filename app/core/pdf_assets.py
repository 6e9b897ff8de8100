from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont


logger = logging.getLogger(__name__)

_ASSETS_ROOT = Path(__file__).resolve().parents[1] / "assets"
_IMAGES_DIR = _ASSETS_ROOT / "images"
_FONTS_DIR = _ASSETS_ROOT / "fonts"

_COMPANION_REGULAR_NAME = "CompanionRegular"
_COMPANION_BOLD_NAME = "CompanionBold"

SUPPORTED_LOGO_SUFFIXES = {".png", ".jpg", ".jpeg"}

LOGO_CANDIDATES: tuple[Path, ...] = (
    _IMAGES_DIR / "logo.png",
    _IMAGES_DIR / "logotchad.png",
    _IMAGES_DIR / "logo.jpg",
    _IMAGES_DIR / "logo.jpeg",
    _IMAGES_DIR / "logo.svg",
)

COMPANION_FONT_CANDIDATES: tuple[Path, ...] = (
    _FONTS_DIR / "Amiri-Regular.ttf",
    _FONTS_DIR / "NotoNaskhArabic-Regular.ttf",
    Path("/usr/share/fonts/truetype/noto/NotoNaskhArabic-Regular.ttf"),
    Path("/usr/share/fonts/truetype/noto/NotoSansArabic-Regular.ttf"),
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
)

COMPANION_BOLD_FONT_CANDIDATES: tuple[Path, ...] = (
    _FONTS_DIR / "Amiri-Bold.ttf",
    _FONTS_DIR / "NotoNaskhArabic-Bold.ttf",
    Path("/usr/share/fonts/truetype/noto/NotoNaskhArabic-Bold.ttf"),
    Path("/usr/share/fonts/truetype/noto/NotoSansArabic-Bold.ttf"),
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
)


@dataclass(frozen=True)
class CompanionFonts:
    """Registered font names used for the Arabic companion column."""

    regular: str
    bold: str


_ASSET_CACHE: dict[tuple[Path, ...], Path | None] = {}
_COMPANION_CACHE: dict[tuple[tuple[Path, ...], tuple[Path, ...]], CompanionFonts | None] = {}


def clear_asset_cache() -> None:
    _ASSET_CACHE.clear()
    _COMPANION_CACHE.clear()


def resolve_asset(candidates: Iterable[Path | str]) -> Path | None:
    """Return the first candidate that exists on disk, memoized per candidate list."""
    key = tuple(Path(candidate) for candidate in candidates)
    if key in _ASSET_CACHE:
        return _ASSET_CACHE[key]

    resolved: Path | None = None
    for candidate in key:
        if candidate.is_file():
            resolved = candidate
            break
        logger.debug("pdf_asset_candidate_missing", extra={"path": str(candidate)})

    _ASSET_CACHE[key] = resolved
    return resolved


def load_font(path: Path | None, font_name: str) -> str | None:
    if path is None:
        return None
    if not path.exists():
        logger.warning("pdf_font_path_missing", extra={"font_path": str(path)})
        return None
    try:
        pdfmetrics.registerFont(TTFont(font_name, str(path)))
    except Exception as exc:
        logger.warning(
            "pdf_font_register_failed",
            extra={"font_path": str(path), "error": str(exc)},
        )
        return None
    return font_name


def resolve_companion_fonts(
    regular_candidates: Iterable[Path | str] = COMPANION_FONT_CANDIDATES,
    bold_candidates: Iterable[Path | str] = COMPANION_BOLD_FONT_CANDIDATES,
) -> CompanionFonts | None:
    regular_paths = tuple(Path(candidate) for candidate in regular_candidates)
    bold_paths = tuple(Path(candidate) for candidate in bold_candidates)
    cache_key = (regular_paths, bold_paths)
    if cache_key in _COMPANION_CACHE:
        return _COMPANION_CACHE[cache_key]

    regular_path = resolve_asset(regular_paths)
    regular = load_font(regular_path, _COMPANION_REGULAR_NAME)
    if regular is None:
        logger.warning(
            "pdf_companion_font_missing",
            extra={"candidates": [str(path) for path in regular_paths]},
        )
        _COMPANION_CACHE[cache_key] = None
        return None

    bold = load_font(resolve_asset(bold_paths), _COMPANION_BOLD_NAME)
    if bold is None:
        logger.warning("pdf_companion_font_bold_fallback", extra={"fallback": regular})
        bold = regular

    fonts = CompanionFonts(regular=regular, bold=bold)
    _COMPANION_CACHE[cache_key] = fonts
    return fonts


def resolve_logo(candidates: Iterable[Path | str] = LOGO_CANDIDATES) -> Path | None:
    logo_path = resolve_asset(candidates)
    if logo_path is None:
        logger.warning("pdf_logo_missing")
        return None
    if logo_path.suffix.lower() not in SUPPORTED_LOGO_SUFFIXES:
        logger.warning(
            "pdf_logo_format_unsupported",
            extra={"path": str(logo_path), "suffix": logo_path.suffix.lower()},
        )
        return None
    return logo_path
