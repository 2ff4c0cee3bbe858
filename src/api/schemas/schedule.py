"""Schedule schemas - request/response models for the weekly timetable"""

from pydantic import BaseModel, Field

from models.domain.schedule import DaySchedule, MINUTES_PER_DAY


class DayScheduleModel(BaseModel):
    """One weekday's alarm window, minutes from local midnight"""
    day: str = Field(description="Weekday name, e.g. 'Monday'")
    start: int = Field(ge=0, le=MINUTES_PER_DAY, description="Window start (minutes)")
    end: int = Field(ge=0, le=MINUTES_PER_DAY, description="Window end (minutes, exclusive)")
    enabled: bool = Field(True, description="Alarm enabled for this day")

    model_config = {
        "json_schema_extra": {
            "example": {"day": "Monday", "start": 420, "end": 480, "enabled": True}
        }
    }

    @classmethod
    def from_domain(cls, schedule: DaySchedule) -> "DayScheduleModel":
        return cls(day=schedule.day, start=schedule.start, end=schedule.end, enabled=schedule.enabled)

    def to_domain(self) -> DaySchedule:
        """Raises ValueError for an unknown day or start >= end."""
        return DaySchedule(day=self.day, start=self.start, end=self.end, enabled=self.enabled)
