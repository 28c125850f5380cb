"""
Data model for BTU.

Time ranges, the fixed slot groups that hold them, and the read-only
records produced by extraction and document rewriting.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterator, List, Optional

from btu.constants import (
    HUNT_PREFIX, TEST_PREFIX, HUNT_SLOT_COUNT, TEST_SLOT_COUNT,
    STATUS_APPLIED, STATUS_SKIPPED, STATUS_UNMATCHED,
)


def _as_text(value) -> str:
    # Unquoted TOML dates and datetimes arrive as date/datetime objects
    if isinstance(value, date):
        return value.isoformat()
    if value is None:
        return ""
    return str(value)


@dataclass
class TimeRange:
    """A start/end pair of local date/time strings; empty means unset."""

    start: str = ""
    end: str = ""

    @property
    def is_configured(self) -> bool:
        """Both ends must be set; a half-filled range counts as unset."""
        return bool(self.start and self.start.strip() and self.end and self.end.strip())

    @classmethod
    def coerce(cls, value: Any) -> "TimeRange":
        """
        Build a TimeRange from the shapes callers commonly hold.

        Accepts a TimeRange, a mapping with "start"/"end" keys, a
        (start, end) pair, or None.
        """
        if isinstance(value, TimeRange):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls(start=_as_text(value.get("start")), end=_as_text(value.get("end")))
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(start=_as_text(value[0]), end=_as_text(value[1]))
        raise TypeError(f"Cannot build a time range from {value!r}")

    def to_dict(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}


class SlotGroup(Mapping):
    """
    Fixed set of numbered slots (Hunt1..Hunt7, Test1..Test2).

    Keys are decided at construction; only the ranges they hold change.
    """

    def __init__(self, prefix: str, count: int):
        self.prefix = prefix
        self._slots: Dict[str, TimeRange] = {
            f"{prefix}{i}": TimeRange() for i in range(1, count + 1)
        }

    @classmethod
    def hunts(cls) -> "SlotGroup":
        return cls(HUNT_PREFIX, HUNT_SLOT_COUNT)

    @classmethod
    def tests(cls) -> "SlotGroup":
        return cls(TEST_PREFIX, TEST_SLOT_COUNT)

    def __getitem__(self, key: str) -> TimeRange:
        return self._slots[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"SlotGroup({self.prefix!r}, {dict(self._slots)!r})"

    def slot_key(self, slot) -> str:
        """Accept "Hunt3", "3" or 3 and return the canonical key."""
        key = str(slot)
        if key.isdigit():
            key = f"{self.prefix}{key}"
        if key not in self._slots:
            raise KeyError(f"Unknown slot: {slot} (expected one of {', '.join(self._slots)})")
        return key

    def set(self, slot, start: Optional[str] = None, end: Optional[str] = None) -> TimeRange:
        """
        Update one or both ends of a slot's range.

        Raises:
            KeyError: If the slot is not part of this group
        """
        key = self.slot_key(slot)
        current = self._slots[key]
        self._slots[key] = TimeRange(
            start=current.start if start is None else start,
            end=current.end if end is None else end,
        )
        return self._slots[key]

    def clear(self, slot) -> None:
        self._slots[self.slot_key(slot)] = TimeRange()

    def update_from(self, ranges: Mapping) -> None:
        """Load several slots from a mapping of key -> range-like value."""
        for slot, value in ranges.items():
            time_range = TimeRange.coerce(value)
            self.set(slot, time_range.start, time_range.end)

    def configured(self) -> Dict[str, TimeRange]:
        return {k: v for k, v in self._slots.items() if v.is_configured}

    def configured_count(self) -> int:
        return len(self.configured())


@dataclass(frozen=True)
class ExtractedUrl:
    """A recognised dashboard link found in a bookmarks document."""

    title: str
    url: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "url": self.url, "type": self.type}


@dataclass
class SlotOutcome:
    """What happened to one slot during a document update."""

    group: str
    key: str
    status: str
    rewritten: int = 0  # matched URLs of a known dialect
    unknown: int = 0  # matched URLs left alone

    @property
    def matched(self) -> int:
        return self.rewritten + self.unknown


@dataclass
class UpdateResult:
    """Rewritten document text plus a per-slot tally."""

    content: str
    original: str = field(default="", repr=False)
    outcomes: List[SlotOutcome] = field(default_factory=list)

    @property
    def configured_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status != STATUS_SKIPPED)

    @property
    def applied_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == STATUS_APPLIED)

    @property
    def unmatched(self) -> List[SlotOutcome]:
        return [o for o in self.outcomes if o.status == STATUS_UNMATCHED]

    @property
    def changed(self) -> bool:
        return self.content != self.original

    def summary(self) -> str:
        return f"{self.applied_count} of {self.configured_count} configured slots were applied"
