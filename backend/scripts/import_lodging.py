"""Import hotels, rooms and beds from a CSV export.

Expected columns: event_id, hotel_name, hotel_address, room_number,
room_type, bed_type. One row per bed.
"""

from __future__ import annotations

import argparse
import asyncio
import csv
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from logistics.core.logging import configure_logging  # noqa: E402
from logistics.db.session import dispose_engine, get_sessionmaker  # noqa: E402
from logistics.schemas.lodging_import import LodgingImportRow  # noqa: E402
from logistics.services.errors import StorageError  # noqa: E402
from logistics.services.lodging_import_service import (  # noqa: E402
    ImportStats,
    import_lodging,
)

LOGGER = logging.getLogger("import_lodging")


def read_rows(path: Path) -> list[LodgingImportRow]:
    rows: list[LodgingImportRow] = []
    with path.open(newline="", encoding="utf-8-sig") as handle:
        for number, raw in enumerate(csv.DictReader(handle), start=2):
            cleaned = {
                (key or "").strip().lower(): (value.strip() or None) if value else None
                for key, value in raw.items()
                if key
            }
            try:
                rows.append(LodgingImportRow.model_validate(cleaned))
            except ValidationError as exc:
                # Drop unparseable values so the importer reports them as missing.
                for error in exc.errors():
                    LOGGER.warning("Row %s %s: %s", number, error["loc"][0], error["msg"])
                    cleaned.pop(str(error["loc"][0]), None)
                rows.append(LodgingImportRow.model_validate(cleaned))
    return rows


async def run_import(path: Path, *, dry_run: bool) -> ImportStats:
    rows = read_rows(path)
    sessionmaker = get_sessionmaker()
    try:
        async with sessionmaker() as session:
            return await import_lodging(session, rows, dry_run=dry_run)
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Import lodging inventory from CSV")
    parser.add_argument("csv_path", type=Path, help="CSV file with one row per bed")
    parser.add_argument(
        "--dry-run", action="store_true", help="Validate rows without writing data"
    )
    args = parser.parse_args()

    configure_logging()

    if not args.csv_path.exists():
        LOGGER.error("CSV file %s not found", args.csv_path)
        raise SystemExit(1)

    try:
        stats = asyncio.run(run_import(args.csv_path, dry_run=args.dry_run))
    except StorageError as exc:
        LOGGER.error("%s", exc)
        raise SystemExit(2) from exc

    for error in stats.errors:
        LOGGER.warning("Row %s [%s]: %s", error["row"], error["field"], error["message"])
    print(
        f"Processed {stats.processed} row(s): {stats.hotels_created} hotel(s), "
        f"{stats.rooms_created} room(s) created, {stats.rooms_expanded} expanded, "
        f"{stats.beds_created} bed(s) created, {len(stats.errors)} rejected."
    )


if __name__ == "__main__":
    main()
