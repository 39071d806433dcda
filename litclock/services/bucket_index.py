"""Minute-slot index over the sorted quote sequence.

The clock face is split into 13 x 60 slots addressed by the packed minute
`hour * 60 + minute` (hour 0..12). Every slot holds the inclusive range of
quote positions that belong to it:

- A slot that exactly matches one or more quotes covers that contiguous run.
- A slot without an exact match inherits the range of the nearest populated
  slot before it (forward-fill).
- Slots before the first quote stay empty (None).

Built once from the sorted quote list, read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

HOURS = 13
MINUTES = 60
SLOT_COUNT = HOURS * MINUTES  # 780


class TimeCoded(Protocol):
    time_code: int


@dataclass(frozen=True)
class BucketRange:
    """Inclusive bounds into the quote sequence."""

    min_index: int
    max_index: int

    @property
    def size(self) -> int:
        return self.max_index - self.min_index + 1

    def __contains__(self, position: object) -> bool:
        return isinstance(position, int) and self.min_index <= position <= self.max_index


def packed_minute(hour: int, minute: int) -> int:
    """Slot number for an (hour, minute) pair already inside the clock domain."""
    if not 0 <= hour < HOURS or not 0 <= minute < MINUTES:
        raise ValueError(f"time {hour}:{minute:02d} outside the clock face")
    return hour * MINUTES + minute


def slot_for_time_code(time_code: int) -> int:
    """Slot number for a packed `hour * 100 + minute` time code."""
    return packed_minute(time_code // 100, time_code % 100)


class BucketIndex:
    """Fixed 780-slot lookup table of `BucketRange | None`."""

    __slots__ = ("_slots", "_first_slot", "_populated")

    def __init__(self, slots: Sequence[BucketRange | None], populated: Sequence[int] = ()) -> None:
        if len(slots) != SLOT_COUNT:
            raise ValueError(f"expected {SLOT_COUNT} slots, got {len(slots)}")
        self._slots: tuple[BucketRange | None, ...] = tuple(slots)
        self._populated: tuple[int, ...] = tuple(populated)
        self._first_slot = next((i for i, r in enumerate(self._slots) if r is not None), None)

    @classmethod
    def build(cls, quotes: Sequence[TimeCoded]) -> BucketIndex:
        """Build the index in one pass over quotes sorted by time code.

        Raises:
            ValueError: a time code is outside the clock face or the
                sequence is not sorted.
        """
        slots: list[BucketRange | None] = [None] * SLOT_COUNT
        populated: list[int] = []
        prev_slot = -1
        current: BucketRange | None = None

        for idx, quote in enumerate(quotes):
            slot = slot_for_time_code(quote.time_code)
            if slot < prev_slot:
                raise ValueError(
                    f"quotes not sorted by time code: position {idx} "
                    f"({quote.time_code}) follows slot {prev_slot}"
                )

            if current is not None and slot == prev_slot:
                current = BucketRange(current.min_index, idx)
                slots[slot] = current
                continue

            for gap in range(prev_slot + 1, slot):
                slots[gap] = current
            current = BucketRange(idx, idx)
            slots[slot] = current
            populated.append(slot)
            prev_slot = slot

        # Tail of the face after the last quote.
        if current is not None:
            for gap in range(prev_slot + 1, SLOT_COUNT):
                slots[gap] = current

        return cls(slots, populated)

    def range_for(self, slot: int) -> BucketRange | None:
        if not 0 <= slot < SLOT_COUNT:
            raise IndexError(f"slot {slot} outside 0..{SLOT_COUNT - 1}")
        return self._slots[slot]

    __getitem__ = range_for

    def __len__(self) -> int:
        return SLOT_COUNT

    def __iter__(self) -> Iterator[BucketRange | None]:
        return iter(self._slots)

    @property
    def first_slot(self) -> int | None:
        """First slot holding a range, None when the index is empty."""
        return self._first_slot

    @property
    def is_empty(self) -> bool:
        return self._first_slot is None

    def populated_slots(self) -> tuple[int, ...]:
        """Slots with at least one exact quote match, ascending."""
        return self._populated

    def __repr__(self) -> str:
        return f"<BucketIndex populated={len(self._populated)} first={self._first_slot}>"
