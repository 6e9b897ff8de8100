from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4


@dataclass(frozen=True)
class ActPalette:
    primary: str
    secondary: str
    gray: str
    light_gray: str
    white: str
    black: str
    flag_blue: str
    flag_yellow: str
    flag_red: str


@dataclass(frozen=True)
class ActTypography:
    title_size: int
    subtitle_size: int
    label_size: int
    text_size: int
    small_size: int
    header_size: int
    motto_size: int
    act_number_size: int
    line_height_ratio: float
    line_gap: float


@dataclass(frozen=True)
class LayoutConfig:
    """Single surface for every position, size and color used on the page.

    Coordinates are measured from the top-left corner of the page, y grows
    downwards.
    """

    page_width: float
    page_height: float
    margin_left: float
    margin_right: float
    margin_top: float
    margin_bottom: float
    flag_width: float
    flag_height: float
    logo_size: float
    header_gap: float
    title_y: float
    subtitle_y: float
    title_block_end_y: float
    subtitle_block_end_y: float
    section_title_offset: float
    section_rule_offset: float
    section_content_offset: float
    section_trailing_gap: float
    paragraph_gap: float
    row_gap: float
    label_column_max: float
    label_column_ratio: float
    value_gutter: float
    bilingual_column_gap: float
    min_line_height_padding: float
    signature_indent: float
    palette: ActPalette
    typography: ActTypography

    @property
    def section_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def min_line_height(self) -> float:
        return self.typography.text_size + self.min_line_height_padding

    @property
    def content_bottom(self) -> float:
        return self.page_height - self.margin_bottom


FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

_PAGE_WIDTH, _PAGE_HEIGHT = A4

DEFAULT_LAYOUT = LayoutConfig(
    page_width=_PAGE_WIDTH,
    page_height=_PAGE_HEIGHT,
    margin_left=35,
    margin_right=35,
    margin_top=36,
    margin_bottom=40,
    flag_width=54,
    flag_height=36,
    logo_size=40,
    header_gap=20,
    title_y=120,
    subtitle_y=150,
    title_block_end_y=150,
    subtitle_block_end_y=170,
    section_title_offset=16,
    section_rule_offset=16,
    section_content_offset=10,
    section_trailing_gap=8,
    paragraph_gap=4,
    row_gap=3,
    label_column_max=105,
    label_column_ratio=0.4,
    value_gutter=8,
    bilingual_column_gap=6,
    min_line_height_padding=4,
    signature_indent=200,
    palette=ActPalette(
        primary="#0e5b23",
        secondary="#212529",
        gray="#6c757d",
        light_gray="#dee2e6",
        white="#ffffff",
        black="#000000",
        flag_blue="#002689",
        flag_yellow="#FFD100",
        flag_red="#CE1126",
    ),
    typography=ActTypography(
        title_size=19,
        subtitle_size=11,
        label_size=9,
        text_size=9,
        small_size=7,
        header_size=15,
        motto_size=10,
        act_number_size=10,
        line_height_ratio=1.16,
        line_gap=2,
    ),
)
