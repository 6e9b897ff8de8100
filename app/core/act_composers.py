from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from app.core.act_records import (
    BIRTH_FIELDS,
    DEATH_FIELDS,
    DIVORCE_FIELDS,
    ENGAGEMENT_FIELDS,
    MARRIAGE_FIELDS,
    ActRecord,
    DetailsReader,
    display_text,
)
from app.core.pdf_assets import resolve_companion_fonts
from app.core.pdf_canvas import PageCanvas
from app.core.pdf_field_table import FieldRow, SectionItem
from app.core.pdf_layout import (
    render_header,
    render_section,
    render_signature_block,
    render_title,
    render_watermark,
)
from app.core.pdf_layout_config import DEFAULT_LAYOUT, LayoutConfig


logger = logging.getLogger(__name__)

NO_MARGINAL_MENTIONS = "Aucune mention marginale à ce jour."
_SEX_LABELS = {"M": "Masculin", "F": "Féminin"}


@dataclass(frozen=True, slots=True)
class ActSection:
    title: str
    content: str | Sequence[SectionItem]


@dataclass(frozen=True, slots=True)
class ActLayoutPlan:
    title: str
    subtitle: str
    sections: list[ActSection]


def _marginal_mentions(reader: DetailsReader) -> ActSection:
    return ActSection("MENTIONS MARGINALES", reader.text("mentionsMarginales") or NO_MARGINAL_MENTIONS)


def _sex_label(value: str) -> str:
    return _SEX_LABELS.get(value.upper(), value)


def _witness_rows(reader: DetailsReader) -> list[SectionItem]:
    return [
        FieldRow("Premier témoin", reader.full_name("temoin1", "prenomTemoin1")),
        FieldRow("Deuxième témoin", reader.full_name("temoin2", "prenomTemoin2")),
        FieldRow("Profession du premier témoin", reader.text("professionTemoin1")),
        FieldRow("Profession du deuxième témoin", reader.text("professionTemoin2")),
    ]


def birth_act_plan(record: ActRecord) -> ActLayoutPlan:
    reader = DetailsReader(record.details, BIRTH_FIELDS)
    child_rows: list[SectionItem] = [
        FieldRow("Nom", reader.upper("nom")),
        FieldRow("Prénom(s)", reader.text("prenom")),
        FieldRow("Sexe", _sex_label(reader.text("sexe"))),
        FieldRow("Date de naissance", reader.date("dateNaissance")),
        FieldRow("Heure de naissance", reader.text("heureNaissance")),
        FieldRow("Lieu de naissance", reader.text("lieuNaissance")),
    ]
    parent_rows: list[SectionItem] = [
        FieldRow("Père", reader.full_name("nomPere", "prenomPere")),
        FieldRow("Date de naissance du père", reader.date("dateNaissancePere")),
        FieldRow("Lieu de naissance du père", reader.text("lieuNaissancePere")),
        FieldRow("Mère", reader.full_name("nomMere", "prenomMere")),
        FieldRow("Date de naissance de la mère", reader.date("dateNaissanceMere")),
        FieldRow("Lieu de naissance de la mère", reader.text("lieuNaissanceMere")),
        FieldRow("Profession du père", reader.text("professionPere")),
        FieldRow("Profession de la mère", reader.text("professionMere")),
        FieldRow("Domicile des parents", reader.text("adresse")),
    ]
    declaration = (
        "Nous, Officier de l'État Civil, certifions que l'enfant mentionné ci-dessus est né "
        f"le {reader.date('dateNaissance')} à {reader.text('lieuNaissance')} et déclaré par ses parents."
    )
    return ActLayoutPlan(
        title="ACTE DE NAISSANCE",
        subtitle="Certificat officiel de naissance",
        sections=[
            ActSection("INFORMATIONS SUR L'ENFANT", child_rows),
            ActSection("INFORMATIONS SUR LES PARENTS", parent_rows),
            ActSection("DÉCLARATION DE NAISSANCE", declaration),
            _marginal_mentions(reader),
        ],
    )


def marriage_act_plan(record: ActRecord) -> ActLayoutPlan:
    reader = DetailsReader(record.details, MARRIAGE_FIELDS)
    spouse_rows: list[SectionItem] = [
        FieldRow("Premier époux/épouse", reader.full_name("conjoint1", "prenomConjoint1")),
        FieldRow("Deuxième époux/épouse", reader.full_name("conjoint2", "prenomConjoint2")),
        FieldRow("Date de mariage", reader.date("dateMariage")),
        FieldRow("Lieu de mariage", reader.text("lieuMariage")),
        FieldRow("Profession du premier époux", reader.text("professionConjoint1")),
        FieldRow("Profession du deuxième époux", reader.text("professionConjoint2")),
    ]
    declaration = (
        "Nous, Officier de l'État Civil, certifions que le mariage entre "
        f"{reader.text('conjoint1')} et {reader.text('conjoint2')} a été célébré le "
        f"{reader.date('dateMariage')} à {reader.text('lieuMariage')} "
        "en présence des témoins mentionnés ci-dessus."
    )
    return ActLayoutPlan(
        title="ACTE DE MARIAGE",
        subtitle="Certificat officiel de mariage",
        sections=[
            ActSection("INFORMATIONS SUR LES ÉPOUX", spouse_rows),
            ActSection("INFORMATIONS SUR LES TÉMOINS", _witness_rows(reader)),
            ActSection("DÉCLARATION DE MARIAGE", declaration),
            _marginal_mentions(reader),
        ],
    )


def death_act_plan(record: ActRecord) -> ActLayoutPlan:
    reader = DetailsReader(record.details, DEATH_FIELDS)
    deceased_rows: list[SectionItem] = [
        FieldRow("Nom de famille", reader.upper("nomDefunt")),
        FieldRow("Prénom(s)", reader.text("prenomsDefunt")),
        FieldRow("Date de naissance", reader.date("dateNaissanceDefunt")),
        FieldRow("Lieu de naissance", reader.text("lieuNaissanceDefunt")),
        FieldRow("Profession", reader.text("professionDefunt")),
        FieldRow("Domicile", reader.text("domicileDefunt")),
        FieldRow("Date du décès", reader.date("dateDeces")),
        FieldRow("Heure du décès", reader.text("heureDeces")),
        FieldRow("Lieu du décès", reader.text("lieuDeces")),
        FieldRow("Cause du décès", reader.text("causeDeces")),
    ]
    declarant_rows: list[SectionItem] = [
        FieldRow("Nom de famille", reader.upper("nomDeclarant")),
        FieldRow("Prénom(s)", reader.text("prenomsDeclarant")),
        FieldRow("Date de naissance", reader.date("dateNaissanceDeclarant")),
        FieldRow("Lieu de naissance", reader.text("lieuNaissanceDeclarant")),
        FieldRow("Profession", reader.text("professionDeclarant")),
        FieldRow("Domicile", reader.text("domicileDeclarant")),
        FieldRow("Lien avec le défunt", reader.text("lienDeclarant")),
    ]
    declaration = (
        "Nous, Officier de l'État Civil, certifions que "
        f"{reader.full_name('nomDefunt', 'prenomsDefunt')} est décédé(e) le {reader.date('dateDeces')} "
        f"à {reader.text('lieuDeces')} et déclaré par {reader.full_name('nomDeclarant', 'prenomsDeclarant')}."
    )
    return ActLayoutPlan(
        title="ACTE DE DÉCÈS",
        subtitle="Certificat officiel de décès",
        sections=[
            ActSection("INFORMATIONS SUR LE DÉFUNT", deceased_rows),
            ActSection("INFORMATIONS SUR LE DÉCLARANT", declarant_rows),
            ActSection("DÉCLARATION DE DÉCÈS", declaration),
            _marginal_mentions(reader),
        ],
    )


def _child_name(child: Any) -> str:
    if isinstance(child, Mapping):
        parts = (display_text(child.get("nom")), display_text(child.get("prenom") or child.get("prenoms")))
        return " ".join(part for part in parts if part)
    return display_text(child)


def divorce_act_plan(record: ActRecord) -> ActLayoutPlan:
    reader = DetailsReader(record.details, DIVORCE_FIELDS)
    ex_spouse_rows: list[SectionItem] = [
        FieldRow("Premier ex-époux/épouse", reader.full_name("exConjoint1", "prenomExConjoint1")),
        FieldRow("Deuxième ex-époux/épouse", reader.full_name("exConjoint2", "prenomExConjoint2")),
        FieldRow("Date de divorce", reader.date("dateDivorce")),
        FieldRow("Lieu de divorce", reader.text("lieuDivorce")),
        FieldRow("Motif du divorce", reader.text("motifDivorce")),
        FieldRow("Profession du premier ex-époux", reader.text("professionExConjoint1")),
        FieldRow("Profession du deuxième ex-époux", reader.text("professionExConjoint2")),
    ]
    sections = [ActSection("INFORMATIONS SUR LES EX-ÉPOUX", ex_spouse_rows)]

    children = reader.items("enfants")
    if children:
        child_rows: list[SectionItem] = [
            FieldRow(f"Enfant {index}", _child_name(child)) for index, child in enumerate(children, start=1)
        ]
        sections.append(ActSection("INFORMATIONS SUR LES ENFANTS", child_rows))

    declaration = (
        "Nous, Officier de l'État Civil, certifions que le divorce entre "
        f"{reader.text('exConjoint1')} et {reader.text('exConjoint2')} a été prononcé le "
        f"{reader.date('dateDivorce')} à {reader.text('lieuDivorce')} "
        f"pour le motif suivant: {reader.text('motifDivorce')}."
    )
    sections.append(ActSection("DÉCLARATION DE DIVORCE", declaration))
    sections.append(_marginal_mentions(reader))
    return ActLayoutPlan(
        title="ACTE DE DIVORCE",
        subtitle="Certificat officiel de divorce",
        sections=sections,
    )


def engagement_act_plan(record: ActRecord) -> ActLayoutPlan:
    reader = DetailsReader(record.details, ENGAGEMENT_FIELDS)
    partner_rows: list[SectionItem] = [
        FieldRow("Premier concubin", reader.full_name("concubin1", "prenomConcubin1")),
        FieldRow("Deuxième concubin", reader.full_name("concubin2", "prenomConcubin2")),
        FieldRow("Date d'engagement", reader.date("dateEngagement")),
        FieldRow("Lieu d'engagement", reader.text("lieuEngagement")),
        FieldRow("Profession du premier concubin", reader.text("professionConcubin1")),
        FieldRow("Profession du deuxième concubin", reader.text("professionConcubin2")),
    ]
    declaration = (
        "Nous, Officier de l'État Civil, certifions que l'engagement de concubinage entre "
        f"{reader.text('concubin1')} et {reader.text('concubin2')} a été enregistré le "
        f"{reader.date('dateEngagement')} à {reader.text('lieuEngagement')} "
        "en présence des témoins mentionnés ci-dessus."
    )
    return ActLayoutPlan(
        title="ACTE D'ENGAGEMENT DE CONCUBINAGE",
        subtitle="Certificat officiel d'engagement",
        sections=[
            ActSection("INFORMATIONS SUR LES CONCUBINS", partner_rows),
            ActSection("INFORMATIONS SUR LES TÉMOINS", _witness_rows(reader)),
            ActSection("DÉCLARATION D'ENGAGEMENT", declaration),
            _marginal_mentions(reader),
        ],
    )


def compose_plan(record: ActRecord, plan: ActLayoutPlan, layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    """Header, title, sections and signature in that order, then finish."""
    page = PageCanvas(layout, companion_fonts=resolve_companion_fonts())
    render_header(page, record)
    render_watermark(page)
    y = render_title(page, plan.title, plan.subtitle)
    for section in plan.sections:
        y = render_section(page, section.title, section.content, y)
    y = render_signature_block(page, record.registry_office, record.registration_date, y)

    if y > layout.content_bottom:
        logger.warning(
            "pdf_page_overflow",
            extra={"title": plan.title, "cursor_y": round(y, 1), "limit_y": layout.content_bottom},
        )
    return page.finish()


def compose_birth_act(record: ActRecord, layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    return compose_plan(record, birth_act_plan(record), layout)


def compose_marriage_act(record: ActRecord, layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    return compose_plan(record, marriage_act_plan(record), layout)


def compose_death_act(record: ActRecord, layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    return compose_plan(record, death_act_plan(record), layout)


def compose_divorce_act(record: ActRecord, layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    return compose_plan(record, divorce_act_plan(record), layout)


def compose_engagement_act(record: ActRecord, layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    return compose_plan(record, engagement_act_plan(record), layout)


ACT_COMPOSERS: dict[str, Callable[[ActRecord], bytes]] = {
    "birth": compose_birth_act,
    "marriage": compose_marriage_act,
    "death": compose_death_act,
    "divorce": compose_divorce_act,
    "cohabitation": compose_engagement_act,
}
