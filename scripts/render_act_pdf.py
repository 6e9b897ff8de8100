#!/usr/bin/env python3
"""Render a civil act stored as JSON into a PDF file on disk."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.act_records import ActRecord
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.pdf_errors import PdfGenerationError
from app.core.pdf_service import build_pdf_filename, render_document


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("record", type=Path, help="path to the JSON act record")
    parser.add_argument(
        "-t",
        "--act-type",
        default=None,
        help="birth, marriage, death, divorce or cohabitation (defaults to the record's actType)",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="target PDF path")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(settings.log_level)

    try:
        payload = json.loads(args.record.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"[render_act_pdf] cannot read record: {exc}", file=sys.stderr)
        return 2
    if not isinstance(payload, dict):
        print("[render_act_pdf] record must be a JSON object", file=sys.stderr)
        return 2

    record = ActRecord.from_payload(payload)
    act_type = args.act_type or record.act_type
    try:
        pdf_bytes = render_document(act_type, record)
    except PdfGenerationError as exc:
        print(f"[render_act_pdf] code={exc.code} message={exc.message}", file=sys.stderr)
        return 1

    output = args.output or Path(settings.pdf_output_dir) / build_pdf_filename(act_type, record.act_number)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf_bytes)
    print(f"[render_act_pdf] written={output} size_bytes={len(pdf_bytes)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
