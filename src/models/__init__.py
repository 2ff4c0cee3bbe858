"""
Models package - Data models for the wake-up light
"""

from .enums import AnimationKind, AcquireResult, TriggerResult, AlarmDecision, LogLevel, LogCategory
from .color import Color, RED, GREEN, BLUE, WHITE, BLACK

__all__ = [
    'AnimationKind',
    'AcquireResult',
    'TriggerResult',
    'AlarmDecision',
    'LogLevel',
    'LogCategory',
    'Color',
    'RED',
    'GREEN',
    'BLUE',
    'WHITE',
    'BLACK',
]
