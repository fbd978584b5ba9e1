#!/usr/bin/env python3
"""Command line entry point writing detected grids as JSON."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from ruled_regions.logging_config import configure_logging, get_logger

from .api import DetectionError, detect_document_grids
from .config import DetectionConfig

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Detect ruled grids in every page of a PDF and dump them to JSON."""
    argv = list(sys.argv[1:] if argv is None else argv)

    verbose = "-v" in argv or "--verbose" in argv
    argv = [arg for arg in argv if arg not in ("-v", "--verbose")]
    configure_logging("DEBUG" if verbose else "INFO")

    if not argv or len(argv) > 2:
        script = Path(sys.argv[0]).name
        logger.error(f"Usage: {script} [-v] <input.pdf> [output.json]")
        return 1

    pdf_path = Path(argv[0])
    output_path = Path(argv[1]) if len(argv) == 2 else pdf_path.with_name(f"{pdf_path.stem}_grids.json")

    try:
        detections = detect_document_grids(pdf_path, config=DetectionConfig(verbose=verbose))
    except (FileNotFoundError, DetectionError) as exc:
        logger.error(f"error: {exc}")
        return 1

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [detection.to_dict() for detection in detections]
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    table_count = sum(len(d.table_candidates) for d in detections)
    logger.info(f"Found {table_count} ruled table(s) in {len(detections)} page(s)")
    logger.info(f"Wrote {output_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual usage
    raise SystemExit(main())
