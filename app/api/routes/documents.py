from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from app.core.act_records import ActRecord
from app.core.monitoring import send_monitoring_event
from app.core.pdf_errors import DOCUMENT_TYPE_UNSUPPORTED, PdfGenerationError
from app.core.pdf_service import SUPPORTED_ACT_TYPES, build_pdf_filename, generate_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


class ActRecordPayload(BaseModel):
    """Act record as sent by the registry front-end.

    Legacy keys (`numeroActe`, `dateEnregistrement`, `mairie`) are kept as
    extra fields and resolved by `ActRecord.from_payload`.
    """

    model_config = ConfigDict(extra="allow")

    actNumber: Any = None
    registrationDate: Any = None
    registryOffice: Any = None
    details: dict[str, Any] = Field(default_factory=dict)


@router.get("/types")
async def list_act_types() -> dict[str, list[str]]:
    return {"types": list(SUPPORTED_ACT_TYPES)}


@router.post("/{act_type}/pdf")
async def generate_act_pdf(act_type: str, payload: ActRecordPayload, request: Request) -> Response:
    request_id = getattr(request.state, "request_id", None) or uuid4().hex
    record = ActRecord.from_payload(payload.model_dump())

    try:
        pdf_bytes = await generate_document(act_type, record)
    except PdfGenerationError as exc:
        if exc.code == DOCUMENT_TYPE_UNSUPPORTED:
            return JSONResponse(status_code=400, content=exc.to_payload())
        logger.error(
            "pdf_generation_request_failed",
            extra={"request_id": request_id, "act_type": act_type, "code": exc.code},
        )
        await send_monitoring_event(
            "pdf_generation_failed",
            {"request_id": request_id, "act_type": act_type, "error": exc.message},
        )
        return JSONResponse(
            status_code=500,
            content={
                "code": exc.code,
                "message": "Erreur lors de la génération du PDF",
                "correlation_id": request_id,
            },
        )

    filename = build_pdf_filename(act_type, record.act_number)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "no-cache, no-store, must-revalidate",
        },
    )
