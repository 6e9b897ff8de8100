from __future__ import annotations

import logging
from typing import Any, Sequence

from app.core.act_records import ActRecord, format_date
from app.core.pdf_assets import resolve_logo
from app.core.pdf_canvas import PageCanvas, shape_companion_text
from app.core.pdf_field_table import SectionItem, render_field_table
from app.core.pdf_layout_config import FONT_BOLD, FONT_ITALIC, FONT_REGULAR
from app.core.timezone import today_app_timezone


logger = logging.getLogger(__name__)

REGISTRY_TITLE = "RÉPUBLIQUE DU TCHAD"
REGISTRY_MOTTO = "Unité - Travail - Progrès"
ACT_NUMBER_PLACEHOLDER = "En cours de génération"
DEFAULT_OFFICE = "N'Djamena"
OFFICER_LABEL = "L'Officier de l'État Civil"
SIGNATURE_CAPTION = "Signature et cachet"

COMPANION_TITLES: dict[str, str] = {
    "ACTE DE NAISSANCE": "عقد ميلاد",
    "ACTE DE MARIAGE": "عقد زواج",
    "ACTE DE DÉCÈS": "عقد وفاة",
    "ACTE DE DIVORCE": "عقد طلاق",
    "ACTE D'ENGAGEMENT DE CONCUBINAGE": "عقد التزام بالمساكنة",
}

COMPANION_SECTION_TITLES: dict[str, str] = {
    "INFORMATIONS SUR L'ENFANT": "معلومات عن الطفل",
    "INFORMATIONS SUR LES PARENTS": "معلومات عن الوالدين",
    "DÉCLARATION DE NAISSANCE": "تصريح بالولادة",
    "INFORMATIONS SUR LES ÉPOUX": "معلومات عن الزوجين",
    "INFORMATIONS SUR LES TÉMOINS": "معلومات عن الشهود",
    "DÉCLARATION DE MARIAGE": "تصريح بالزواج",
    "INFORMATIONS SUR LE DÉFUNT": "معلومات عن المتوفى",
    "INFORMATIONS SUR LE DÉCLARANT": "معلومات عن المصرح",
    "DÉCLARATION DE DÉCÈS": "تصريح بالوفاة",
    "INFORMATIONS SUR LES EX-ÉPOUX": "معلومات عن الزوجين السابقين",
    "INFORMATIONS SUR LES ENFANTS": "معلومات عن الأطفال",
    "DÉCLARATION DE DIVORCE": "تصريح بالطلاق",
    "INFORMATIONS SUR LES CONCUBINS": "معلومات عن الطرفين",
    "DÉCLARATION D'ENGAGEMENT": "تصريح بالالتزام",
    "MENTIONS MARGINALES": "البيانات الهامشية",
}


def render_header(page: PageCanvas, record: ActRecord) -> float:
    layout = page.layout
    palette = layout.palette
    typography = layout.typography
    flag_x = layout.margin_left
    flag_y = layout.margin_top
    band_width = layout.flag_width / 3

    page.draw_rect(flag_x, flag_y, layout.flag_width, layout.flag_height, fill_color=palette.white)
    for index, color in enumerate((palette.flag_blue, palette.flag_yellow, palette.flag_red)):
        page.draw_rect(flag_x + index * band_width, flag_y, band_width, layout.flag_height, fill_color=color)
    page.draw_rect(flag_x, flag_y, layout.flag_width, layout.flag_height, stroke_color=palette.black)

    text_x = flag_x + layout.flag_width + 15
    text_width = layout.page_width / 2 - text_x
    page.draw_text(
        REGISTRY_TITLE,
        text_x,
        flag_y + 5,
        width=text_width,
        font=FONT_BOLD,
        size=typography.header_size,
        color=palette.secondary,
    )
    page.draw_text(
        REGISTRY_MOTTO,
        text_x,
        flag_y + 25,
        width=text_width,
        font=FONT_ITALIC,
        size=typography.motto_size,
        color=palette.secondary,
    )

    right_edge = layout.page_width - layout.margin_right
    number_y = flag_y + 5
    logo_path = resolve_logo()
    if logo_path is not None:
        logo_x = right_edge - layout.logo_size
        if page.draw_image(logo_path, logo_x, flag_y, layout.logo_size, layout.logo_size):
            number_y = flag_y + layout.logo_size + 4

    act_number = record.act_number or ACT_NUMBER_PLACEHOLDER
    number_width = 160
    page.draw_text(
        f"N° {act_number}",
        right_edge - number_width,
        number_y,
        width=number_width,
        font=FONT_BOLD,
        size=typography.act_number_size,
        color=palette.primary,
        align="right",
    )

    return flag_y + layout.flag_height + layout.header_gap


def render_watermark(page: PageCanvas) -> None:
    # Watermark is disabled on issued certificates.
    return None


def render_title(page: PageCanvas, title: str, subtitle: str = "") -> float:
    layout = page.layout
    palette = layout.palette
    typography = layout.typography
    width = layout.section_width

    page.draw_text(
        title,
        layout.margin_left,
        layout.title_y,
        width=width,
        font=FONT_BOLD,
        size=typography.title_size,
        color=palette.primary,
        align="center",
    )

    companion = page.companion_fonts
    companion_title = shape_companion_text(COMPANION_TITLES.get(title, ""))
    if companion is not None and companion_title:
        page.draw_text(
            companion_title,
            layout.margin_left,
            layout.title_y,
            width=width,
            font=companion.bold,
            size=typography.subtitle_size,
            color=palette.primary,
            align="right",
        )

    if subtitle:
        page.draw_text(
            subtitle,
            layout.margin_left,
            layout.subtitle_y,
            width=width,
            font=FONT_REGULAR,
            size=typography.small_size,
            color=palette.gray,
            align="center",
        )
        return layout.subtitle_block_end_y
    return layout.title_block_end_y


def render_section(
    page: PageCanvas,
    title: str,
    content: str | Sequence[SectionItem] | None,
    start_y: float,
) -> float:
    """Draw a titled, ruled section and return the cursor below it.

    A string is laid out as one wrapped paragraph, a sequence goes through
    the field table.
    """
    layout = page.layout
    palette = layout.palette
    typography = layout.typography
    width = layout.section_width
    x = layout.margin_left

    y = start_y + layout.section_title_offset
    page.draw_text(
        title,
        x,
        y,
        width=width,
        font=FONT_BOLD,
        size=typography.subtitle_size,
        color=palette.primary,
    )
    companion = page.companion_fonts
    companion_title = shape_companion_text(COMPANION_SECTION_TITLES.get(title, ""))
    if companion is not None and companion_title:
        page.draw_text(
            companion_title,
            x,
            y,
            width=width,
            font=companion.bold,
            size=typography.subtitle_size,
            color=palette.primary,
            align="right",
        )

    y += layout.section_rule_offset
    page.draw_line(x, y, x + width, y, color=palette.light_gray, line_width=1)
    y += layout.section_content_offset

    if isinstance(content, str):
        paragraph_height = page.measure_text(
            content,
            FONT_REGULAR,
            typography.text_size,
            width,
            line_gap=typography.line_gap,
        )
        page.draw_text(
            content,
            x,
            y,
            width=width,
            font=FONT_REGULAR,
            size=typography.text_size,
            color=palette.secondary,
            line_gap=typography.line_gap,
        )
        y += paragraph_height + layout.paragraph_gap
    elif content:
        y = render_field_table(page, content, x, y, width)

    return y + layout.section_trailing_gap


def render_signature_block(
    page: PageCanvas,
    office_name: str | None,
    registration_date: Any,
    start_y: float,
) -> float:
    layout = page.layout
    palette = layout.palette
    typography = layout.typography
    x = layout.margin_left + layout.signature_indent
    right_edge = layout.page_width - layout.margin_right
    width = right_edge - x

    y = start_y + 20
    page.draw_line(x, y, right_edge, y, color=palette.light_gray, line_width=0.5)

    date_text = format_date(registration_date) or format_date(today_app_timezone())
    page.draw_text(
        f"Fait à {office_name or DEFAULT_OFFICE}, le {date_text}",
        x,
        y + 10,
        width=width,
        font=FONT_REGULAR,
        size=typography.small_size,
        color=palette.gray,
        align="right",
    )

    y += 30
    page.draw_text(
        OFFICER_LABEL,
        x,
        y,
        width=width,
        font=FONT_BOLD,
        size=typography.text_size,
        color=palette.secondary,
        align="right",
    )

    y += 20
    page.draw_line(x, y, right_edge, y, color=palette.secondary, line_width=0.5)
    page.draw_text(
        SIGNATURE_CAPTION,
        x,
        y + 5,
        width=width,
        font=FONT_REGULAR,
        size=typography.small_size,
        color=palette.gray,
        align="right",
    )

    return y + 30
