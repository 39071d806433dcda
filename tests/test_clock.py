import random
from datetime import timezone

import pytest

from litclock.services.bucket_index import BucketIndex, BucketRange
from litclock.services.clock import (
    ClockConfigError,
    ClockLookup,
    ClockState,
    NoQuoteForTime,
    current_clock_time,
    normalize_hour,
    normalize_minute,
    resolve_timezone,
)
from litclock.services.quote_store import Quote


class MaxRandom(random.Random):
    """Always picks the upper bound."""

    def randint(self, a: int, b: int) -> int:
        return b


def _quote(code: int, text: str) -> Quote:
    return Quote(time_code=code, text=text, author="Author", title="Title", link="")


@pytest.fixture
def quotes() -> tuple[Quote, ...]:
    return (_quote(100, "A"), _quote(105, "B"), _quote(105, "C"))


@pytest.fixture
def lookup(quotes) -> ClockLookup:
    return ClockLookup(quotes, BucketIndex.build(quotes), rng=random.Random(1234))


@pytest.mark.parametrize(
    "hour,expected",
    [(0, 12), (1, 1), (11, 11), (12, 12), (13, 1), (23, 11), (24, 12), (25, 1), (36, 12)],
)
def test_normalize_hour(hour, expected):
    assert normalize_hour(hour) == expected


@pytest.mark.parametrize("minute,expected", [(0, 0), (59, 59), (60, 0), (75, 15), (135, 15)])
def test_normalize_minute(minute, expected):
    assert normalize_minute(minute) == expected


def test_negative_values_are_rejected(lookup):
    with pytest.raises(ValueError):
        lookup.lookup(-1, 0)
    with pytest.raises(ValueError):
        lookup.lookup(1, -5)


def test_singleton_bucket_is_deterministic(lookup):
    assert {lookup.lookup(1, 0).text for _ in range(50)} == {"A"}
    # forward-filled 1:03 reads as 1:00
    assert lookup.lookup(1, 3).text == "A"


def test_multi_bucket_stays_in_range_and_covers_it(lookup):
    seen = {lookup.lookup(1, 5).text for _ in range(500)}
    assert seen == {"B", "C"}


def test_upper_bound_is_selectable(quotes):
    lookup = ClockLookup(quotes, BucketIndex.build(quotes), rng=MaxRandom())
    assert lookup.lookup(1, 5).text == "C"


def test_wraparound_inputs_hit_same_bucket(lookup):
    assert lookup.bucket(13, 65) == BucketRange(1, 2)
    assert lookup.bucket(25, 0) == BucketRange(0, 0)


def test_empty_slot_raises_no_quote():
    quotes = (_quote(110, "ten past one"),)
    lookup = ClockLookup(quotes, BucketIndex.build(quotes))

    # 1:05 precedes the first quote
    with pytest.raises(NoQuoteForTime) as exc_info:
        lookup.lookup(1, 5)
    assert exc_info.value.hour == 1
    assert exc_info.value.minute == 5
    assert lookup.bucket(13, 5) is None
    assert lookup.lookup(1, 10).text == "ten past one"
    assert lookup.lookup(12, 59).text == "ten past one"


def test_multiples_of_twelve_read_as_twelve():
    quotes = (_quote(1200, "noon"),)
    lookup = ClockLookup(quotes, BucketIndex.build(quotes))
    assert lookup.lookup(0, 0).text == "noon"
    assert lookup.lookup(12, 0).text == "noon"
    assert lookup.lookup(24, 0).text == "noon"


def test_empty_index_raises_for_every_time():
    lookup = ClockLookup((), BucketIndex.build(()))
    with pytest.raises(NoQuoteForTime):
        lookup.lookup(6, 30)


def test_clock_state_from_quotes(quotes):
    state = ClockState.from_quotes(list(quotes), template="<p>{{time}}</p>", tz=timezone.utc)
    assert state.quotes == quotes
    assert state.index.first_slot == 60
    assert state.lookup.lookup(1, 0).text == "A"
    hour, minute = state.now()
    assert 1 <= hour <= 12
    assert 0 <= minute <= 59


def test_current_clock_time_is_twelve_hour():
    hour, minute = current_clock_time(timezone.utc)
    assert 1 <= hour <= 12
    assert 0 <= minute <= 59


def test_resolve_timezone():
    assert resolve_timezone("") is None
    assert resolve_timezone("UTC") is not None


@pytest.mark.parametrize("name", ["Not/AZone", "../x"])
def test_resolve_timezone_rejects_unknown_zones(name):
    with pytest.raises(ClockConfigError, match="CLOCK_TIMEZONE"):
        resolve_timezone(name)
