"""Alarm schemas - trigger, cancel and status responses"""

from typing import Optional

from pydantic import BaseModel, Field


class TriggerResponse(BaseModel):
    """Result of a test-lights or sunrise-alarm request"""
    status: str = Field(description="'accepted' or 'completed'")
    animation: str = Field(description="Animation kind that was started")
    message: str


class CancelResponse(BaseModel):
    cancelled: bool = Field(description="True if a running animation was signalled")


class StatusResponse(BaseModel):
    running: bool
    current: Optional[str] = Field(None, description="Kind of the running animation")
    last_error: Optional[str] = Field(None, description="Last device failure, if any")
