"""Pydantic request and response models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from fitness_coach.domain.water import WaterIntake


class DailyLogUpdate(BaseModel):
    """Fields to merge into a daily log entry."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    protein: bool | None = None
    steps: bool | None = None
    water: bool | None = None
    workout: bool | None = None
    water_glasses: int | None = Field(default=None, alias="waterGlasses", ge=0)
    notes: str | None = None

    def changes(self) -> dict[str, object]:
        """Return the supplied fields, dropping null goal flags."""
        supplied = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in supplied.items()
            if value is not None or name in {"water_glasses", "notes"}
        }


class GoalUpdate(BaseModel):
    """New value for a single goal on today's entry."""

    model_config = ConfigDict(populate_by_name=True)

    value: bool
    water_glasses: int | None = Field(default=None, alias="waterGlasses", ge=0)


class WaterIntakeUpdate(BaseModel):
    """Glass count to set for today."""

    glasses: int = Field(ge=0)


class WaterIntakeView(BaseModel):
    """Today's water intake."""

    model_config = ConfigDict(populate_by_name=True)

    day: date = Field(alias="date")
    glasses: int
    ml: int
    goal_met: bool = Field(alias="goalMet")
    progress_percent: int = Field(alias="progressPercent")

    @classmethod
    def from_intake(cls, intake: WaterIntake) -> "WaterIntakeView":
        """Build the view from a domain intake."""
        return cls(
            day=intake.day,
            glasses=intake.glasses,
            ml=intake.ml,
            goal_met=intake.goal_met,
            progress_percent=intake.progress_percent,
        )


class MetricCreate(BaseModel):
    """New body measurement check-in."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    day: date | None = Field(default=None, alias="date")
    waist: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    photos_taken: bool = Field(default=False, alias="photosTaken")
