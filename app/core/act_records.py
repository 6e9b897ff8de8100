from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from app.core.timezone import as_app_timezone


DISPLAY_DATE_FORMAT = "%d/%m/%Y"
_FALLBACK_DATE_FORMATS = ("%d/%m/%Y", "%d.%m.%Y", "%d-%m-%Y")
_EMPTY_MARKERS = {"undefined", "null", "none"}


RECORD_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "act_type": ("actType", "act_type", "type"),
    "act_number": ("actNumber", "act_number", "numeroActe"),
    "registration_date": (
        "registrationDate",
        "registration_date",
        "dateEnregistrement",
        "dateEtablissement",
    ),
    "registry_office": ("registryOffice", "registry_office", "mairie"),
}


@dataclass(slots=True)
class ActRecord:
    act_type: str | None = None
    act_number: str | None = None
    registration_date: Any = None
    registry_office: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ActRecord:
        values: dict[str, Any] = {}
        for attribute, keys in RECORD_FIELD_ALIASES.items():
            values[attribute] = next(
                (payload[key] for key in keys if not _is_blank(payload.get(key))),
                None,
            )

        office = values["registry_office"]
        if isinstance(office, Mapping):
            office = office.get("nom") or office.get("ville")

        details = payload.get("details")
        return cls(
            act_type=display_text(values["act_type"]) or None,
            act_number=display_text(values["act_number"]) or None,
            registration_date=values["registration_date"],
            registry_office=display_text(office) or None,
            details=dict(details) if isinstance(details, Mapping) else {},
        )


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip() or value.strip().lower() in _EMPTY_MARKERS
    return False


def format_date(value: Any) -> str:
    """Format a date-like value as dd/mm/yyyy; anything unparsable gives ''."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = as_app_timezone(value)
        return value.strftime(DISPLAY_DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(DISPLAY_DATE_FORMAT)
    if not isinstance(value, str) or _is_blank(value):
        return ""

    raw = value.strip()
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        for fmt in _FALLBACK_DATE_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt)
            except ValueError:
                continue
            return parsed.strftime(DISPLAY_DATE_FORMAT)
        return ""
    return format_date(parsed)


def display_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (datetime, date)):
        return format_date(value)
    if isinstance(value, bool):
        return "Oui" if value else "Non"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _lookup(details: Mapping[str, Any], key: str) -> Any:
    current: Any = details
    for part in key.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


class DetailsReader:
    """Reads `details` through an ordered `(canonical, *aliases)` table.

    The first alias holding a non-blank scalar wins; nested mappings are
    reached with dotted keys (``"pere.nom"``).
    """

    def __init__(self, details: Mapping[str, Any] | None, fields: Mapping[str, tuple[str, ...]]) -> None:
        self._details = details or {}
        self._fields = fields

    def raw(self, name: str) -> Any:
        for key in self._fields.get(name, (name,)):
            value = _lookup(self._details, key)
            if isinstance(value, Mapping) or _is_blank(value):
                continue
            return value
        return None

    def text(self, name: str) -> str:
        return display_text(self.raw(name))

    def upper(self, name: str) -> str:
        return self.text(name).upper()

    def date(self, name: str) -> str:
        return format_date(self.raw(name))

    def full_name(self, *names: str) -> str:
        return " ".join(part for part in (self.text(name) for name in names) if part)

    def items(self, name: str) -> list[Any]:
        for key in self._fields.get(name, (name,)):
            value = _lookup(self._details, key)
            if isinstance(value, (list, tuple)):
                return list(value)
        return []


BIRTH_FIELDS: dict[str, tuple[str, ...]] = {
    "nom": ("nom", "nomEnfant", "enfant.nom"),
    "prenom": ("prenom", "prenoms", "prenomsEnfant", "enfant.prenoms", "enfant.prenom"),
    "sexe": ("sexe", "enfant.sexe"),
    "dateNaissance": ("dateNaissance", "enfant.dateNaissance"),
    "heureNaissance": ("heureNaissance", "enfant.heureNaissance"),
    "lieuNaissance": ("lieuNaissance", "enfant.lieuNaissance"),
    "nomPere": ("nomPere", "pere", "pere.nom"),
    "prenomPere": ("prenomPere", "prenomsPere", "pere.prenoms", "pere.prenom"),
    "dateNaissancePere": ("dateNaissancePere", "pere.dateNaissance"),
    "lieuNaissancePere": ("lieuNaissancePere", "pere.lieuNaissance"),
    "professionPere": ("professionPere", "pere.profession"),
    "nomMere": ("nomMere", "mere", "mere.nom"),
    "prenomMere": ("prenomMere", "prenomsMere", "mere.prenoms", "mere.prenom"),
    "dateNaissanceMere": ("dateNaissanceMere", "mere.dateNaissance"),
    "lieuNaissanceMere": ("lieuNaissanceMere", "mere.lieuNaissance"),
    "professionMere": ("professionMere", "mere.profession"),
    "adresse": ("adresse", "domicileParents", "adresseParents"),
    "mentionsMarginales": ("mentionsMarginales", "observations"),
}

MARRIAGE_FIELDS: dict[str, tuple[str, ...]] = {
    "conjoint1": ("conjoint1", "nomConjoint1", "epoux.nom"),
    "prenomConjoint1": ("prenomConjoint1", "prenomsConjoint1", "epoux.prenoms"),
    "conjoint2": ("conjoint2", "nomConjoint2", "epouse.nom"),
    "prenomConjoint2": ("prenomConjoint2", "prenomsConjoint2", "epouse.prenoms"),
    "dateMariage": ("dateMariage",),
    "lieuMariage": ("lieuMariage",),
    "professionConjoint1": ("professionConjoint1", "epoux.profession"),
    "professionConjoint2": ("professionConjoint2", "epouse.profession"),
    "temoin1": ("temoin1", "nomTemoin1"),
    "prenomTemoin1": ("prenomTemoin1", "prenomsTemoin1"),
    "temoin2": ("temoin2", "nomTemoin2"),
    "prenomTemoin2": ("prenomTemoin2", "prenomsTemoin2"),
    "professionTemoin1": ("professionTemoin1",),
    "professionTemoin2": ("professionTemoin2",),
    "mentionsMarginales": ("mentionsMarginales", "observations"),
}

DEATH_FIELDS: dict[str, tuple[str, ...]] = {
    "nomDefunt": ("nomDefunt", "defunt.nom"),
    "prenomsDefunt": ("prenomsDefunt", "prenomDefunt", "defunt.prenoms"),
    "dateNaissanceDefunt": ("dateNaissanceDefunt", "defunt.dateNaissance"),
    "lieuNaissanceDefunt": ("lieuNaissanceDefunt", "defunt.lieuNaissance"),
    "professionDefunt": ("professionDefunt", "defunt.profession"),
    "domicileDefunt": ("domicileDefunt", "adresseDefunt", "defunt.domicile"),
    "dateDeces": ("dateDeces", "defunt.dateDeces"),
    "heureDeces": ("heureDeces", "defunt.heureDeces"),
    "lieuDeces": ("lieuDeces", "defunt.lieuDeces"),
    "causeDeces": ("causeDeces", "defunt.causeDeces"),
    "nomDeclarant": ("nomDeclarant", "declarant.nom"),
    "prenomsDeclarant": ("prenomsDeclarant", "prenomDeclarant", "declarant.prenoms"),
    "dateNaissanceDeclarant": ("dateNaissanceDeclarant", "declarant.dateNaissance"),
    "lieuNaissanceDeclarant": ("lieuNaissanceDeclarant", "declarant.lieuNaissance"),
    "professionDeclarant": ("professionDeclarant", "declarant.profession"),
    "domicileDeclarant": ("domicileDeclarant", "adresseDeclarant", "declarant.domicile"),
    "lienDeclarant": ("lienDeclarant", "declarant.lien"),
    "mentionsMarginales": ("mentionsMarginales", "observations"),
}

DIVORCE_FIELDS: dict[str, tuple[str, ...]] = {
    "exConjoint1": ("exConjoint1", "nomExConjoint1", "conjoint1"),
    "prenomExConjoint1": ("prenomExConjoint1", "prenomsExConjoint1", "prenomConjoint1"),
    "exConjoint2": ("exConjoint2", "nomExConjoint2", "conjoint2"),
    "prenomExConjoint2": ("prenomExConjoint2", "prenomsExConjoint2", "prenomConjoint2"),
    "dateDivorce": ("dateDivorce",),
    "lieuDivorce": ("lieuDivorce",),
    "motifDivorce": ("motifDivorce", "motifs"),
    "professionExConjoint1": ("professionExConjoint1", "professionConjoint1"),
    "professionExConjoint2": ("professionExConjoint2", "professionConjoint2"),
    "enfants": ("enfants", "children"),
    "mentionsMarginales": ("mentionsMarginales", "observations"),
}

ENGAGEMENT_FIELDS: dict[str, tuple[str, ...]] = {
    "concubin1": ("concubin1", "nomConcubin1", "concubin1.nom"),
    "prenomConcubin1": ("prenomConcubin1", "prenomsConcubin1", "concubin1.prenoms"),
    "concubin2": ("concubin2", "nomConcubin2", "concubin2.nom"),
    "prenomConcubin2": ("prenomConcubin2", "prenomsConcubin2", "concubin2.prenoms"),
    "dateEngagement": ("dateEngagement", "dateDebut"),
    "lieuEngagement": ("lieuEngagement",),
    "professionConcubin1": ("professionConcubin1", "concubin1.profession"),
    "professionConcubin2": ("professionConcubin2", "concubin2.profession"),
    "temoin1": ("temoin1", "nomTemoin1"),
    "prenomTemoin1": ("prenomTemoin1", "prenomsTemoin1"),
    "temoin2": ("temoin2", "nomTemoin2"),
    "prenomTemoin2": ("prenomTemoin2", "prenomsTemoin2"),
    "professionTemoin1": ("professionTemoin1",),
    "professionTemoin2": ("professionTemoin2",),
    "mentionsMarginales": ("mentionsMarginales", "observations"),
}
