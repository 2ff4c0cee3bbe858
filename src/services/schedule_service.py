"""Schedule Service - weekly alarm timetable with JSON persistence"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import aiofiles

from models.domain.schedule import DaySchedule, WEEKDAYS, default_schedules
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SCHEDULE)


class ScheduleService:
    """
    Weekday -> DaySchedule map.

    Starts from the defaults (every day 07:00-08:00), overlaid with whatever
    the schedule file holds. The file is a JSON object keyed by weekday.
    File access goes through aiofiles so saving from an API handler never
    blocks the animation tasks.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._schedules: Dict[str, DaySchedule] = default_schedules()

    async def load(self) -> None:
        """Load schedules from file. A missing or unreadable file keeps the defaults."""
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
            data = json.loads(content)
        except FileNotFoundError:
            log.info("No schedule file, using defaults", path=str(self.path))
            return
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            log.warn(f"Unreadable schedule file, using defaults: {e}", path=str(self.path))
            return

        if isinstance(data, dict):
            entries = list(data.values())
        elif isinstance(data, list):
            entries = data
        else:
            log.warn("Schedule file is not an object or list, using defaults", found=type(data).__name__)
            return

        loaded = 0
        for entry in entries:
            try:
                schedule = DaySchedule.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                log.warn(f"Skipping invalid schedule entry: {e}", entry=entry)
                continue
            self._schedules[schedule.day] = schedule
            loaded += 1

        log.info(f"Loaded {loaded} schedules", path=str(self.path))

    async def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {day: self._schedules[day].to_dict() for day in WEEKDAYS}
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2))
        log.debug(f"Schedules saved {self.path}")

    def get(self, day: str) -> Optional[DaySchedule]:
        return self._schedules.get(day)

    def all(self) -> List[DaySchedule]:
        """All schedules, Monday first."""
        return [self._schedules[day] for day in WEEKDAYS if day in self._schedules]

    async def update(self, schedules: Iterable[DaySchedule]) -> List[DaySchedule]:
        """Replace the given days (others untouched) and persist."""
        changed = []
        for schedule in schedules:
            self._schedules[schedule.day] = schedule
            changed.append(schedule.day)
        await self.save()
        log.info("Schedules updated", days=", ".join(changed) or "-")
        return self.all()
