"""
Schedule endpoints - read and update the weekly alarm timetable
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.middleware.error_handler import InvalidScheduleError
from api.schemas.schedule import DayScheduleModel
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.get("", response_model=List[DayScheduleModel], summary="List all day schedules")
async def list_schedules(services: ServiceContainer = Depends(get_service_container)):
    return [DayScheduleModel.from_domain(s) for s in services.schedule_service.all()]


@router.post("/save", response_model=List[DayScheduleModel], summary="Update and persist day schedules")
async def save_schedules(
    schedules: List[DayScheduleModel],
    services: ServiceContainer = Depends(get_service_container),
):
    """
    Partial update: only the days present in the body are replaced.
    Nothing is saved if any entry is invalid.
    """
    domain = []
    for model in schedules:
        try:
            domain.append(model.to_domain())
        except ValueError as ex:
            raise InvalidScheduleError(model.day, str(ex))

    updated = await services.schedule_service.update(domain)
    return [DayScheduleModel.from_domain(s) for s in updated]
