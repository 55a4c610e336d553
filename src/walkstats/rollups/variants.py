"""Range variants: chart granularity plus how many units back to show."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "DEFAULT_COUNTS",
    "DEFAULT_VARIANT",
    "RangeKind",
    "RangeVariant",
    "SEGMENT_PRESETS",
    "SEGMENT_TITLES",
]


class RangeKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


# Span used when a variant's count is not usable.
DEFAULT_COUNTS: dict[RangeKind, int] = {
    RangeKind.DAILY: 7,
    RangeKind.WEEKLY: 6,
    RangeKind.MONTHLY: 12,
    RangeKind.YEARLY: 5,
}

SEGMENT_TITLES = ("Daily", "Weekly", "Monthly", "Yearly")


@dataclass(frozen=True)
class RangeVariant:
    """One of Daily(n), Weekly(n), Monthly(n), Yearly(n).

    Attributes
    ----------
    kind : RangeKind
        Granularity
    count : int
        Number of days/weeks/months/years the window spans, ending at the
        reference date. Counts below the minimum fall back to DEFAULT_COUNTS.
    """

    kind: RangeKind
    count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", RangeKind(self.kind))
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError(f"Range count must be an int, got {type(self.count).__name__}")

    @classmethod
    def daily(cls, count: int = 7) -> RangeVariant:
        return cls(RangeKind.DAILY, count)

    @classmethod
    def weekly(cls, count: int = 4) -> RangeVariant:
        return cls(RangeKind.WEEKLY, count)

    @classmethod
    def monthly(cls, count: int = 12) -> RangeVariant:
        return cls(RangeKind.MONTHLY, count)

    @classmethod
    def yearly(cls, count: int = 4) -> RangeVariant:
        return cls(RangeKind.YEARLY, count)

    @classmethod
    def from_segment(cls, index: int) -> RangeVariant:
        """Variant for a range selector segment (0=Daily..3=Yearly).

        Unknown indexes select the daily preset.
        """
        if 0 <= index < len(SEGMENT_PRESETS):
            return SEGMENT_PRESETS[index]
        return DEFAULT_VARIANT

    @classmethod
    def from_name(cls, name: str, count: int | None = None) -> RangeVariant:
        """Build a variant from a kind name ("daily", "Weekly", ...).

        Without a count, the selector preset for that kind is returned.

        Raises
        ------
        ValueError
            If name is not a known kind
        """
        try:
            kind = RangeKind(name.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown range variant: {name!r}") from exc

        if count is None:
            return next(preset for preset in SEGMENT_PRESETS if preset.kind is kind)
        return cls(kind, count)

    @property
    def span(self) -> int:
        """Number of units the window actually covers.

        Weekly falls back for counts <= 1, the other kinds for counts <= 0.
        """
        minimum = 2 if self.kind is RangeKind.WEEKLY else 1
        if self.count >= minimum:
            return self.count
        return DEFAULT_COUNTS[self.kind]

    @property
    def title(self) -> str:
        return self.kind.value.capitalize()

    def __str__(self) -> str:
        return f"{self.title}({self.count})"


SEGMENT_PRESETS: tuple[RangeVariant, ...] = (
    RangeVariant.daily(7),
    RangeVariant.weekly(4),
    RangeVariant.monthly(12),
    RangeVariant.yearly(4),
)

DEFAULT_VARIANT = SEGMENT_PRESETS[0]
