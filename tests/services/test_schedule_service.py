import json

import pytest

from models.domain.schedule import DaySchedule, WEEKDAYS
from services.schedule_service import ScheduleService

DEFAULT_FRIDAY = DaySchedule("Friday", 420, 480)


@pytest.mark.asyncio
async def test_missing_file_uses_defaults(tmp_path):
    service = ScheduleService(tmp_path / "missing.json")
    await service.load()

    assert [s.day for s in service.all()] == list(WEEKDAYS)
    assert all(s.start == 420 and s.end == 480 and s.enabled for s in service.all())


@pytest.mark.parametrize(
    "content",
    [b"{not json", b"null", b"5", b'"Monday"', b"\xff\xfe\xfa"],
    ids=["broken-json", "null", "number", "string", "not-utf8"],
)
@pytest.mark.asyncio
async def test_unusable_file_uses_defaults(tmp_path, content):
    path = tmp_path / "schedules.json"
    path.write_bytes(content)

    service = ScheduleService(path)
    await service.load()

    assert service.get("Friday") == DEFAULT_FRIDAY
    assert len(service.all()) == 7


@pytest.mark.asyncio
async def test_load_overlays_file_and_skips_bad_entries(tmp_path):
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps({
        "Monday": {"day": "Monday", "start": 390, "end": 450, "enabled": True},
        "Tuesday": {"day": "Tuesday", "start": 500, "end": 400},
        "Sunday": {"day": "Sunday", "start": 540, "end": 600, "enabled": False},
        "Bogus": {"day": "Funday", "start": 1, "end": 2},
        "Thursday": None,
        "Friday": [1, 2, 3],
    }))

    service = ScheduleService(path)
    await service.load()

    assert service.get("Monday") == DaySchedule("Monday", 390, 450)
    assert service.get("Tuesday") == DaySchedule("Tuesday", 420, 480)
    assert service.get("Sunday").enabled is False
    assert service.get("Thursday") == DaySchedule("Thursday", 420, 480)
    assert service.get("Friday") == DEFAULT_FRIDAY
    assert service.get("Funday") is None


@pytest.mark.asyncio
async def test_load_accepts_a_list(tmp_path):
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps([{"day": "Wednesday", "start": 300, "end": 360}]))

    service = ScheduleService(path)
    await service.load()

    assert service.get("Wednesday") == DaySchedule("Wednesday", 300, 360)


@pytest.mark.asyncio
async def test_update_persists_and_survives_reload(tmp_path):
    path = tmp_path / "state" / "schedules.json"
    service = ScheduleService(path)

    result = await service.update([DaySchedule("Saturday", 600, 660, enabled=False)])

    assert result[5] == DaySchedule("Saturday", 600, 660, enabled=False)
    data = json.loads(path.read_text())
    assert list(data) == list(WEEKDAYS)
    assert data["Saturday"] == {"day": "Saturday", "start": 600, "end": 660, "enabled": False}

    reloaded = ScheduleService(path)
    await reloaded.load()
    assert reloaded.all() == service.all()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"day": "Monday", "start": 480, "end": 420},
        {"day": "Monday", "start": 420, "end": 420},
        {"day": "Monday", "start": -1, "end": 60},
        {"day": "Monday", "start": 0, "end": 1441},
        {"day": "Mon", "start": 0, "end": 60},
    ],
)
def test_day_schedule_validation(kwargs):
    with pytest.raises(ValueError):
        DaySchedule(**kwargs)


def test_window_is_half_open():
    schedule = DaySchedule("Monday", 420, 480)
    assert schedule.contains(420)
    assert schedule.contains(479)
    assert not schedule.contains(480)
    assert not schedule.contains(419)
