from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable

from app.core.act_composers import ACT_COMPOSERS
from app.core.act_records import ActRecord
from app.core.pdf_errors import (
    DOCUMENT_TYPE_UNSUPPORTED,
    PDF_GENERATION_ERROR,
    PdfGenerationError,
)


logger = logging.getLogger(__name__)

SUPPORTED_ACT_TYPES: tuple[str, ...] = tuple(ACT_COMPOSERS)

_FILENAME_KIND_BY_ACT_TYPE = {
    "birth": "naissance",
    "marriage": "mariage",
    "death": "deces",
    "divorce": "divorce",
    "cohabitation": "engagement-concubinage",
}
_FILENAME_UNSAFE_RE = re.compile(r"[^a-z0-9-]")


def normalize_act_type(act_type: Any) -> str:
    if not isinstance(act_type, str) or not act_type:
        raise PdfGenerationError(
            "Act type is not set",
            code=DOCUMENT_TYPE_UNSUPPORTED,
            details={"act_type": act_type},
        )
    normalized = act_type.lower()
    if normalized not in ACT_COMPOSERS:
        raise PdfGenerationError(
            f"Unsupported document type: {act_type}",
            code=DOCUMENT_TYPE_UNSUPPORTED,
            details={"act_type": act_type, "supported": list(SUPPORTED_ACT_TYPES)},
        )
    return normalized


def resolve_composer(act_type: Any) -> Callable[[ActRecord], bytes]:
    return ACT_COMPOSERS[normalize_act_type(act_type)]


def _as_record(record: ActRecord | Mapping[str, Any]) -> ActRecord:
    if isinstance(record, ActRecord):
        return record
    return ActRecord.from_payload(record)


def render_document(act_type: Any, record: ActRecord | Mapping[str, Any]) -> bytes:
    """Produce the finished PDF for one act, or raise PdfGenerationError.

    The act type is checked before any page is opened, so an unsupported
    type never leaves a partial document behind.
    """
    normalized = normalize_act_type(act_type)
    composer = ACT_COMPOSERS[normalized]
    act_record = _as_record(record)

    logger.info(
        "pdf_generation_started",
        extra={"act_type": normalized, "act_number": act_record.act_number or ""},
    )
    try:
        payload = composer(act_record)
    except PdfGenerationError:
        logger.exception("pdf_generation_failed", extra={"act_type": normalized})
        raise
    except Exception as exc:
        logger.exception(
            "pdf_generation_failed",
            extra={"act_type": normalized, "error": str(exc)},
        )
        raise PdfGenerationError(
            f"Failed to generate {normalized} document",
            code=PDF_GENERATION_ERROR,
            details={"act_type": normalized, "original": exc},
        ) from exc

    logger.info(
        "pdf_generation_succeeded",
        extra={"act_type": normalized, "size_bytes": len(payload)},
    )
    return payload


async def generate_document(act_type: Any, record: ActRecord | Mapping[str, Any]) -> bytes:
    normalize_act_type(act_type)
    return await asyncio.to_thread(render_document, act_type, record)


def build_pdf_filename(act_type: str, act_number: str | None) -> str:
    kind = _FILENAME_KIND_BY_ACT_TYPE.get(act_type.lower(), "acte")
    number = _FILENAME_UNSAFE_RE.sub("-", (act_number or "sans-numero").lower())
    return f"acte-{kind}-{number}.pdf"
