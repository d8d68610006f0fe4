"""Domain models for body measurements."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MetricEntry:
    """One body measurement check-in.

    Waist is in centimetres and weight in kilograms. A check-in may record
    only that progress photos were taken.
    """

    id: int
    day: date
    waist: float | None = None
    weight: float | None = None
    photos_taken: bool = False

    @property
    def has_measurement(self) -> bool:
        """Return True when waist or weight was recorded."""
        return self.waist is not None or self.weight is not None


@dataclass(frozen=True)
class MetricPoint:
    """Chart point for one measured day."""

    day: date
    waist: float | None
    weight: float | None
