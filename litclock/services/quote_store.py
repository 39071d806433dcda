"""Quote store: reads the littime table once at startup.

Rows come back ordered by packed time code. Each row is validated and
converted into an immutable `Quote`; anything malformed aborts startup.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from litclock.models import LitTime
from litclock.stores.sqlite import get_session

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class Quote:
    time_code: int
    text: str
    author: str
    title: str
    link: str

    @property
    def hour(self) -> int:
        return self.time_code // 100

    @property
    def minute(self) -> int:
        return self.time_code % 100


class QuoteStoreError(RuntimeError):
    pass


def validate_time_code(time_code: object) -> int:
    """Check a packed time code is a 12-hour clock time (1:00 .. 12:59).

    Raises:
        QuoteStoreError: not an int, or hour/minute out of range.
    """
    if isinstance(time_code, bool) or not isinstance(time_code, int):
        raise QuoteStoreError(f"time code must be an integer, got {time_code!r}")
    hour, minute = divmod(time_code, 100)
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise QuoteStoreError(f"time code {time_code} is not a 12-hour clock time")
    return time_code


def quote_from_row(time_code: object, text: str | None, author: str | None, title: str | None, link: str | None) -> Quote:
    return Quote(
        time_code=validate_time_code(time_code),
        text=text or "",
        author=author or "",
        title=title or "",
        link=link or "",
    )


async def load_quotes() -> tuple[Quote, ...]:
    """Load every quote sorted ascending by time code.

    Returns:
        Immutable tuple of quotes.

    Raises:
        QuoteStoreError: database unreadable or a row is malformed.
    """
    query = select(LitTime.time, LitTime.text, LitTime.author, LitTime.title, LitTime.link).order_by(
        LitTime.time.asc(), LitTime.id.asc()
    )
    try:
        async with get_session() as session:
            result = await session.execute(query)
            rows = result.all()
    except SQLAlchemyError as e:
        raise QuoteStoreError(f"Failed to read quotes: {e}") from e

    quotes = tuple(quote_from_row(*row) for row in rows)
    logger.info(f"Loaded {len(quotes)} quotes")
    return quotes
