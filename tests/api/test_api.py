import asyncio

import httpx
import pytest
import pytest_asyncio

from api import create_app
from api.dependencies import set_service_container
from hardware.led.virtual_strip import VirtualStrip
from models.config import AppConfig, AnimationTimings
from services.alarm_service import AlarmService
from services.schedule_service import ScheduleService
from services.service_container import ServiceContainer

SLOW = AnimationTimings(display_delay_s=5.0, step_hold_s=5.0, poll_interval_s=0.01)


def build_services(engine, strip, guard, tmp_path):
    return ServiceContainer(
        config=AppConfig(),
        device=strip,
        guard=guard,
        engine=engine,
        alarm_service=AlarmService(engine),
        schedule_service=ScheduleService(tmp_path / "schedules.json"),
    )


@pytest.fixture
def services(make_engine, strip, guard, tmp_path):
    services = build_services(make_engine(), strip, guard, tmp_path)
    set_service_container(services)
    yield services
    set_service_container(None)


@pytest_asyncio.fixture
async def client():
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://light.local") as client:
        yield client


@pytest.fixture
def slow_services(services):
    services.engine.timings = SLOW
    return services


# ---------------------------------------------------------------------------
# Health / wiring
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_unavailable_before_services_are_set(client):
    set_service_container(None)
    response = await client.get("/api/status")
    assert response.status_code == 503


# ---------------------------------------------------------------------------
# Schedules
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_schedules_defaults(client, services):
    response = await client.get("/api/schedules")

    assert response.status_code == 200
    body = response.json()
    assert [d["day"] for d in body] == [
        "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
    ]
    assert body[0] == {"day": "Monday", "start": 420, "end": 480, "enabled": True}


@pytest.mark.asyncio
async def test_save_schedules_is_partial_and_persisted(client, services, tmp_path):
    response = await client.post(
        "/api/schedules/save",
        json=[{"day": "Tuesday", "start": 390, "end": 450, "enabled": False}],
    )

    assert response.status_code == 200
    body = {d["day"]: d for d in response.json()}
    assert body["Tuesday"] == {"day": "Tuesday", "start": 390, "end": 450, "enabled": False}
    assert body["Monday"]["start"] == 420
    assert (tmp_path / "schedules.json").exists()

    reloaded = ScheduleService(tmp_path / "schedules.json")
    await reloaded.load()
    assert reloaded.get("Tuesday").start == 390


@pytest.mark.asyncio
async def test_save_rejects_inverted_window(client, services, tmp_path):
    response = await client.post(
        "/api/schedules/save",
        json=[
            {"day": "Monday", "start": 300, "end": 360},
            {"day": "Friday", "start": 500, "end": 400},
        ],
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_SCHEDULE"
    assert response.json()["error"]["details"]["day"] == "Friday"
    assert services.schedule_service.get("Monday").start == 420
    assert not (tmp_path / "schedules.json").exists()


@pytest.mark.asyncio
async def test_save_rejects_unknown_day(client, services):
    response = await client.post("/api/schedules/save", json=[{"day": "Someday", "start": 1, "end": 2}])
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_SCHEDULE"


@pytest.mark.asyncio
async def test_save_rejects_malformed_body(client, services):
    response = await client.post("/api/schedules/save", json=[{"day": "Monday", "start": -5}])

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["validation_errors"]}
    assert "0.start" in fields
    assert "0.end" in fields


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_test_lights_accepted(client, services, strip):
    response = await client.post("/api/test-lights")

    assert response.status_code == 202
    assert response.json()["status"] == "accepted"
    assert await services.alarm_service.wait_idle(timeout=2.0)
    assert strip.render_count == 1 + 2 * strip.led_count + 1


@pytest.mark.asyncio
async def test_test_lights_wait_returns_after_completion(client, services, strip):
    response = await client.post("/api/test-lights", params={"wait": "true"})

    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert not services.engine.is_running()
    assert strip.render_count == 1 + 2 * strip.led_count + 1


@pytest.mark.asyncio
async def test_test_lights_wait_reports_device_failure(client, services, make_engine, guard, tmp_path):
    broken = VirtualStrip(10, fail_on_render=1)
    set_service_container(build_services(make_engine(device=broken), broken, guard, tmp_path))

    response = await client.post("/api/test-lights", params={"wait": "true"})

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "HARDWARE_ERROR"
    assert not guard.is_running()


@pytest.mark.asyncio
async def test_second_trigger_gets_409(client, slow_services):
    first = await client.post("/api/sunrise-alarm")
    assert first.status_code == 202

    for path in ("/api/sunrise-alarm", "/api/test-lights"):
        response = await client.post(path)
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "ANIMATION_BUSY"
        assert error["details"]["running"] == "SUNRISE_ALARM"

    await client.post("/api/cancel")
    assert await slow_services.alarm_service.wait_idle(timeout=1.0)


@pytest.mark.asyncio
async def test_concurrent_triggers_accept_exactly_one(client, slow_services):
    responses = await asyncio.gather(
        *(client.post(path) for path in ["/api/sunrise-alarm", "/api/test-lights"] * 4)
    )

    codes = [r.status_code for r in responses]
    assert codes.count(202) == 1
    assert codes.count(409) == 7

    await client.post("/api/cancel")
    assert await slow_services.alarm_service.wait_idle(timeout=1.0)


@pytest.mark.asyncio
async def test_cancel_and_status(client, slow_services, strip):
    idle = await client.get("/api/status")
    assert idle.json() == {"running": False, "current": None, "last_error": None}

    assert (await client.post("/api/cancel")).json() == {"cancelled": False}

    await client.post("/api/sunrise-alarm")
    running = await client.get("/api/status")
    assert running.json()["running"] is True
    assert running.json()["current"] == "SUNRISE_ALARM"

    assert (await client.post("/api/cancel")).json() == {"cancelled": True}
    assert await slow_services.alarm_service.wait_idle(timeout=1.0)

    after = await client.get("/api/status")
    assert after.json()["running"] is False
    assert strip.brightness == 0


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_task_summary_counts_running_animation(client, slow_services):
    await client.post("/api/sunrise-alarm")

    summary = (await client.get("/api/system/tasks/summary")).json()
    assert summary["running"] == 1
    assert summary["running_by_category"] == {"ANIMATION": 1}

    tasks = (await client.get("/api/system/tasks")).json()
    assert tasks["count"] == 1
    assert tasks["tasks"][0]["category"] == "ANIMATION"
    assert tasks["tasks"][0]["status"] == "running"

    await client.post("/api/cancel")
    assert await slow_services.alarm_service.wait_idle(timeout=1.0)


# ---------------------------------------------------------------------------
# Web UI
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_web_ui_is_served_when_configured(tmp_path):
    ui = tmp_path / "static"
    ui.mkdir()
    (ui / "index.html").write_text("<html>sunrise</html>")
    (ui / "app.js").write_text("console.log('hi');")

    transport = httpx.ASGITransport(app=create_app(static_dir=str(ui)))
    async with httpx.AsyncClient(transport=transport, base_url="http://light.local") as ui_client:
        index = await ui_client.get("/")
        script = await ui_client.get("/static/app.js")
        health = await ui_client.get("/api/health")

    assert index.status_code == 200
    assert "sunrise" in index.text
    assert script.status_code == 200
    assert "console.log" in script.text
    assert health.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_missing_web_ui_dir_falls_back_to_api_landing(tmp_path):
    transport = httpx.ASGITransport(app=create_app(static_dir=str(tmp_path / "nope")))
    async with httpx.AsyncClient(transport=transport, base_url="http://light.local") as ui_client:
        root = await ui_client.get("/")
        script = await ui_client.get("/static/app.js")

    assert root.json()["health"] == "/api/health"
    assert script.status_code == 404
