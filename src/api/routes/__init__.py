"""
API Routes - HTTP endpoint handlers

Routes receive HTTP requests, validate them, call services,
and return HTTP responses.

Structure: alarm (triggers, cancel, status), schedules, system (tasks).
All are included in the main FastAPI app under /api.
"""
