"""Errors raised by the civil-act PDF engine."""

from __future__ import annotations

from typing import Any

DOCUMENT_TYPE_UNSUPPORTED = "DOCUMENT_TYPE_UNSUPPORTED"
PDF_GENERATION_ERROR = "PDF_GENERATION_ERROR"


class PdfGenerationError(RuntimeError):
    """Raised when a civil-act document cannot be produced.

    `code` is one of the module-level error codes, `details` carries
    context for logs and API responses (the wrapped exception is stored
    under ``details["original"]``).
    """

    name = "PdfGenerationError"

    def __init__(
        self,
        message: str,
        code: str = PDF_GENERATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        public_details = {key: value for key, value in self.details.items() if key != "original"}
        return {
            "name": self.name,
            "code": self.code,
            "message": self.message,
            "details": public_details,
        }
