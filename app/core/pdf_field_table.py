from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from app.core.pdf_canvas import PageCanvas, shape_companion_text
from app.core.pdf_layout_config import FONT_BOLD, FONT_REGULAR


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldRow:
    label: str
    value: str


SectionItem = Union[FieldRow, str]


# Arabic label shown in the right-hand column next to a French label.
COMPANION_LABELS: dict[str, str] = {
    "Nom": "اللقب",
    "Nom de famille": "اللقب",
    "Prénom(s)": "الاسم",
    "Sexe": "الجنس",
    "Date de naissance": "تاريخ الميلاد",
    "Heure de naissance": "ساعة الميلاد",
    "Lieu de naissance": "مكان الميلاد",
    "Père": "الأب",
    "Mère": "الأم",
    "Date de naissance du père": "تاريخ ميلاد الأب",
    "Lieu de naissance du père": "مكان ميلاد الأب",
    "Date de naissance de la mère": "تاريخ ميلاد الأم",
    "Lieu de naissance de la mère": "مكان ميلاد الأم",
    "Profession du père": "مهنة الأب",
    "Profession de la mère": "مهنة الأم",
    "Domicile des parents": "سكن الوالدين",
    "Profession": "المهنة",
    "Domicile": "السكن",
    "Date du décès": "تاريخ الوفاة",
    "Heure du décès": "ساعة الوفاة",
    "Lieu du décès": "مكان الوفاة",
    "Cause du décès": "سبب الوفاة",
    "Lien avec le défunt": "صلة القرابة بالمتوفى",
    "Premier époux/épouse": "الزوج الأول",
    "Deuxième époux/épouse": "الزوج الثاني",
    "Date de mariage": "تاريخ الزواج",
    "Lieu de mariage": "مكان الزواج",
    "Profession du premier époux": "مهنة الزوج الأول",
    "Profession du deuxième époux": "مهنة الزوج الثاني",
    "Premier témoin": "الشاهد الأول",
    "Deuxième témoin": "الشاهد الثاني",
    "Profession du premier témoin": "مهنة الشاهد الأول",
    "Profession du deuxième témoin": "مهنة الشاهد الثاني",
    "Premier ex-époux/épouse": "الزوج السابق الأول",
    "Deuxième ex-époux/épouse": "الزوج السابق الثاني",
    "Date de divorce": "تاريخ الطلاق",
    "Lieu de divorce": "مكان الطلاق",
    "Motif du divorce": "سبب الطلاق",
    "Profession du premier ex-époux": "مهنة الزوج السابق الأول",
    "Profession du deuxième ex-époux": "مهنة الزوج السابق الثاني",
    "Premier concubin": "الطرف الأول",
    "Deuxième concubin": "الطرف الثاني",
    "Date d'engagement": "تاريخ الالتزام",
    "Lieu d'engagement": "مكان الالتزام",
    "Profession du premier concubin": "مهنة الطرف الأول",
    "Profession du deuxième concubin": "مهنة الطرف الثاني",
}


@dataclass(frozen=True)
class FieldTableGeometry:
    bilingual: bool
    column_width: float
    label_width: float
    value_width: float
    left_x: float
    value_x: float
    right_x: float


def field_table_geometry(page: PageCanvas, x: float, section_width: float) -> FieldTableGeometry:
    layout = page.layout
    bilingual = page.companion_fonts is not None
    if bilingual:
        column_width = section_width / 2 - layout.bilingual_column_gap
    else:
        column_width = section_width
    label_width = min(layout.label_column_max, layout.label_column_ratio * column_width)
    value_width = column_width - label_width - layout.value_gutter
    return FieldTableGeometry(
        bilingual=bilingual,
        column_width=column_width,
        label_width=label_width,
        value_width=value_width,
        left_x=x,
        value_x=x + label_width + layout.value_gutter,
        right_x=x + section_width - column_width,
    )


def render_field_table(
    page: PageCanvas,
    items: Sequence[SectionItem],
    x: float,
    y: float,
    section_width: float,
) -> float:
    """Draw label/value rows (and bare paragraphs) top-down from `y`.

    Every FieldRow reserves a row, even when both texts are empty. When
    companion fonts are registered on the page, the right column only
    carries the translated label; values are never repeated there.
    """
    layout = page.layout
    typography = layout.typography
    palette = layout.palette
    geometry = field_table_geometry(page, x, section_width)
    companion = page.companion_fonts

    for item in items:
        if isinstance(item, str):
            paragraph_width = geometry.column_width
            paragraph_height = page.measure_text(
                item,
                FONT_REGULAR,
                typography.text_size,
                paragraph_width,
                line_gap=typography.line_gap,
            )
            page.draw_text(
                item,
                geometry.left_x,
                y,
                width=paragraph_width,
                font=FONT_REGULAR,
                size=typography.text_size,
                color=palette.secondary,
                line_gap=typography.line_gap,
            )
            y += paragraph_height + layout.paragraph_gap
            continue

        label_text = f"{item.label} :" if item.label else ""
        value_text = item.value or ""

        label_height = page.measure_text(label_text, FONT_BOLD, typography.label_size, geometry.label_width)
        value_height = page.measure_text(value_text, FONT_BOLD, typography.text_size, geometry.value_width)

        companion_label = ""
        companion_label_height = 0.0
        # Values are never mirrored in the companion column.
        companion_value_height = 0.0
        if companion is not None and item.label:
            companion_label = shape_companion_text(COMPANION_LABELS.get(item.label, ""))
            if companion_label:
                companion_label_height = page.measure_text(
                    companion_label,
                    companion.bold,
                    typography.label_size,
                    geometry.column_width,
                )
            else:
                logger.warning("pdf_companion_label_unmapped", extra={"label": item.label})

        row_height = max(
            label_height,
            value_height,
            companion_label_height,
            companion_value_height,
            layout.min_line_height,
        )

        if label_text:
            page.draw_text(
                label_text,
                geometry.left_x,
                y,
                width=geometry.label_width,
                font=FONT_BOLD,
                size=typography.label_size,
                color=palette.gray,
            )
        if value_text:
            page.draw_text(
                value_text,
                geometry.value_x,
                y,
                width=geometry.value_width,
                font=FONT_BOLD,
                size=typography.text_size,
                color=palette.secondary,
            )
        if companion_label:
            page.draw_text(
                companion_label,
                geometry.right_x,
                y,
                width=geometry.column_width,
                font=companion.bold,
                size=typography.label_size,
                color=palette.gray,
                align="right",
            )

        y += row_height + layout.row_gap

    return y
