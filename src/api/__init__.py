"""
Sunrise Light - API Layer

REST interface to the alarm engine and the schedule store. Every endpoint
is a thin facade over the services in ServiceContainer.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Error handling
"""

from api.main import create_app

__all__ = ["create_app"]
