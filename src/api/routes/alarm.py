"""
Alarm endpoints - manual triggers, cancel and status

All triggers share the engine's guard with the scheduler: a request while
anything else is running gets 409, it is never queued.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_service_container
from api.middleware.error_handler import AnimationBusyError, HardwareError
from api.schemas.alarm import TriggerResponse, CancelResponse, StatusResponse
from models.enums import TriggerResult
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["Alarm"])


def _raise_busy(services: ServiceContainer) -> None:
    kind = services.engine.current_kind
    raise AnimationBusyError(running=kind.name if kind else None)


@router.post(
    "/test-lights",
    response_model=TriggerResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Run the diagnostic light sequence",
    responses={409: {"description": "Another animation is running"}, 503: {"description": "Device failure"}},
)
async def test_lights(
    response: Response,
    wait: bool = Query(False, description="Block until the sequence has finished"),
    services: ServiceContainer = Depends(get_service_container),
):
    """
    Red fill, red pixel scan, clear.

    With wait=true the response is sent after the sequence ends (200) and a
    device failure is reported as 503.
    """
    alarm = services.alarm_service

    if not wait:
        if alarm.trigger_test() is TriggerResult.BUSY:
            _raise_busy(services)
        return TriggerResponse(status="accepted", animation="DIAGNOSTIC_SUITE", message="Test lights started")

    result = await alarm.run_test()
    if result is TriggerResult.BUSY:
        _raise_busy(services)
    if result is TriggerResult.FAILED:
        raise HardwareError(services.engine.last_error or "LED strip failure")
    response.status_code = status.HTTP_200_OK
    return TriggerResponse(status="completed", animation="DIAGNOSTIC_SUITE", message="Test lights finished")


@router.post(
    "/sunrise-alarm",
    response_model=TriggerResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Start the sunrise alarm now",
    responses={409: {"description": "Another animation is running"}},
)
async def sunrise_alarm(services: ServiceContainer = Depends(get_service_container)):
    if services.alarm_service.trigger_alarm() is TriggerResult.BUSY:
        _raise_busy(services)
    return TriggerResponse(status="accepted", animation="SUNRISE_ALARM", message="Sunrise alarm started")


@router.post("/cancel", response_model=CancelResponse, summary="Cancel the running animation")
async def cancel(services: ServiceContainer = Depends(get_service_container)):
    """No-op when nothing is running."""
    return CancelResponse(cancelled=services.alarm_service.cancel_running())


@router.get("/status", response_model=StatusResponse, summary="Engine state")
async def get_status(services: ServiceContainer = Depends(get_service_container)):
    return StatusResponse(**services.alarm_service.status())
