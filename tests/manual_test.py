"""Manual helper for printing the grids detected in a PDF."""

from __future__ import annotations

import sys
from pathlib import Path

from ruled_regions import detect_document_grids


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python -m tests.manual_test <input.pdf>")
        raise SystemExit(1)

    for detection in detect_document_grids(Path(argv[0])):
        print(
            f"page {detection.page_number}: {len(detection.rectangles)} rectangles, "
            f"{len(detection.polygons)} polygons, {len(detection.table_candidates)} tables"
        )
        for table in detection.table_candidates:
            print(f"  {table!r} bbox={table.bounding_rectangle}")


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
