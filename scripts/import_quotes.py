#!/usr/bin/env python3
"""Load a literary clock dump into the littime table.

Input format (one quote per line, pipe separated):
    HH:MM|time phrase|quote|title|author[|link]

HH:MM is a 24-hour time; it is stored as a 12-hour packed code
(13:05 -> 105, 00:30 -> 1230). The table is created if needed and its
content replaced (dropped and recreated). Malformed lines are skipped.

Usage:
    python -m scripts.import_quotes litclock_annotated.csv

Env vars:
    DATABASE_URL (default sqlite+aiosqlite:///lit_clock.db)
"""

import asyncio
import csv
import os
import sys
from collections.abc import Iterable, Iterator

# Ensure imports work when executed as a script/module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

from litclock.models import LitTime  # noqa: E402
from litclock.stores.sqlite import close_db, create_tables, drop_tables, get_session, init_db  # noqa: E402

load_dotenv()


def to_time_code(clock: str) -> int:
    """Convert 24-hour "HH:MM" to the 12-hour packed code.

    Raises:
        ValueError: not a valid HH:MM time.
    """
    hour_s, sep, minute_s = clock.strip().partition(":")
    if not sep:
        raise ValueError(f"missing ':' in {clock!r}")
    hour, minute = int(hour_s), int(minute_s)
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        raise ValueError(f"{clock!r} is not a 24-hour time")
    return (hour % 12 or 12) * 100 + minute


def parse_rows(lines: Iterable[str]) -> Iterator[dict[str, object]]:
    """Yield littime rows from dump lines, skipping malformed ones."""
    reader = csv.reader(lines, delimiter="|", quoting=csv.QUOTE_NONE)
    for lineno, fields in enumerate(reader, start=1):
        if not fields or not "".join(fields).strip():
            continue
        if len(fields) < 5:
            print(f"  skip line {lineno}: expected at least 5 fields, got {len(fields)}")
            continue
        try:
            time_code = to_time_code(fields[0])
        except ValueError as e:
            print(f"  skip line {lineno}: {e}")
            continue
        yield {
            "time": time_code,
            "text": fields[2].strip(),
            "title": fields[3].strip(),
            "author": fields[4].strip(),
            "link": fields[5].strip() if len(fields) > 5 else "",
        }


async def import_quotes(path: str, database_url: str | None = None) -> int:
    """Replace the littime content with the rows parsed from `path`.

    Returns:
        Number of quotes written.
    """
    with open(path, encoding="utf-8") as f:
        rows = list(parse_rows(f))

    await init_db(database_url)
    try:
        await drop_tables()
        await create_tables()
        async with get_session() as session:
            session.add_all(LitTime(**row) for row in rows)
    finally:
        await close_db()
    return len(rows)


async def main() -> None:
    if len(sys.argv) < 2:
        raise SystemExit("usage: python -m scripts.import_quotes <dump.csv>")

    count = await import_quotes(sys.argv[1])
    print(f"Imported {count} quotes")


if __name__ == "__main__":
    asyncio.run(main())
