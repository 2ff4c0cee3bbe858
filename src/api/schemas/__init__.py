from .alarm import TriggerResponse, CancelResponse, StatusResponse
from .error import ErrorDetail, ErrorResponse, ValidationErrorResponse
from .schedule import DayScheduleModel

__all__ = [
    "TriggerResponse",
    "CancelResponse",
    "StatusResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ValidationErrorResponse",
    "DayScheduleModel",
]
