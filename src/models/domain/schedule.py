"""Weekly timetable models"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

WEEKDAYS: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class DaySchedule:
    """
    Alarm window for one weekday.

    start/end are minutes from local midnight; the window is [start, end).
    """
    day: str
    start: int
    end: int
    enabled: bool = True

    def __post_init__(self):
        if self.day not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {self.day!r}")
        for name, value in (("start", self.start), ("end", self.end)):
            if not 0 <= value <= MINUTES_PER_DAY:
                raise ValueError(f"{name} must be within 0-{MINUTES_PER_DAY} minutes, got {value}")
        if self.start >= self.end:
            raise ValueError(f"start ({self.start}) must be before end ({self.end})")

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DaySchedule':
        return cls(
            day=data["day"],
            start=int(data["start"]),
            end=int(data["end"]),
            enabled=bool(data.get("enabled", True)),
        )


def default_schedules() -> Dict[str, DaySchedule]:
    """Every day 07:00-08:00, enabled."""
    return {day: DaySchedule(day=day, start=420, end=480, enabled=True) for day in WEEKDAYS}
