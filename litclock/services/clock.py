"""Clock lookup: (hour, minute) -> one quote.

Normalization:
- hour: `h % 12 or 12`, so 0, 12 and 24 all read as 12 and 13 reads as 1
- minute: `m % 60`

Selection inside a bucket:
- single quote: always that quote
- several quotes: uniform pick over the inclusive range via the injected rng
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, tzinfo
import logging
import random
import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from litclock.services.bucket_index import MINUTES, BucketIndex, BucketRange
from litclock.services.quote_store import Quote

logger = logging.getLogger("uvicorn.error")

_default_rng = random.SystemRandom()


class ClockConfigError(RuntimeError):
    """Clock settings that cannot be applied (e.g. an unknown timezone)."""


class NoQuoteForTime(LookupError):
    """No quote covers the requested slot (it precedes the first quote)."""

    def __init__(self, hour: int, minute: int) -> None:
        super().__init__(f"No quote available for {hour}:{minute:02d}")
        self.hour = hour
        self.minute = minute


def normalize_hour(hour: int) -> int:
    if hour < 0:
        raise ValueError(f"hour must be non-negative, got {hour}")
    return hour % 12 or 12


def normalize_minute(minute: int) -> int:
    if minute < 0:
        raise ValueError(f"minute must be non-negative, got {minute}")
    return minute % MINUTES


class ClockLookup:
    """Pick quotes for clock times from a built index.

    Holds no mutable state; `rng` only needs `randint(a, b)` and must be safe
    to share between concurrent requests (SystemRandom is).
    """

    def __init__(self, quotes: Sequence[Quote], index: BucketIndex, rng: random.Random | None = None) -> None:
        self._quotes = quotes
        self._index = index
        self._rng = rng or _default_rng

    def bucket(self, hour: int, minute: int) -> BucketRange | None:
        """Normalized bucket range for a time, None before the first quote."""
        h = normalize_hour(hour)
        m = normalize_minute(minute)
        return self._index[h * MINUTES + m]

    def lookup(self, hour: int, minute: int) -> Quote:
        """Return one quote for the given time.

        Raises:
            NoQuoteForTime: the slot has no coverage.
            ValueError: negative hour or minute.
        """
        started = time.perf_counter()
        bucket = self.bucket(hour, minute)
        if bucket is None:
            raise NoQuoteForTime(hour, minute)

        logger.debug(f"range {bucket.min_index} - {bucket.max_index}")
        if bucket.min_index == bucket.max_index:
            position = bucket.min_index
        else:
            position = self._rng.randint(bucket.min_index, bucket.max_index)

        logger.debug(f"entry {position} elapsed: {(time.perf_counter() - started) * 1000:.3f}ms")
        return self._quotes[position]


@dataclass(frozen=True)
class ClockState:
    """Read-only state shared by every request handler.

    Created once in the application lifespan.
    """

    quotes: tuple[Quote, ...]
    index: BucketIndex
    lookup: ClockLookup
    template: str = ""
    tz: tzinfo | None = None

    @classmethod
    def from_quotes(
        cls,
        quotes: Sequence[Quote],
        *,
        template: str = "",
        tz: tzinfo | None = None,
        rng: random.Random | None = None,
    ) -> ClockState:
        frozen = tuple(quotes)
        index = BucketIndex.build(frozen)
        return cls(
            quotes=frozen,
            index=index,
            lookup=ClockLookup(frozen, index, rng=rng),
            template=template,
            tz=tz,
        )

    def now(self) -> tuple[int, int]:
        """Current (hour, minute) on the 12-hour clock."""
        return current_clock_time(self.tz)


def resolve_timezone(name: str) -> tzinfo | None:
    """Map a configured zone name to tzinfo, None for system local time.

    Raises:
        ClockConfigError: the name is not a known IANA zone.
    """
    name = name.strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ClockConfigError(f"Unknown timezone {name!r} in CLOCK_TIMEZONE") from e


def current_clock_time(tz: tzinfo | None = None) -> tuple[int, int]:
    now = datetime.now(tz) if tz else datetime.now()
    return now.hour % 12 or 12, now.minute
