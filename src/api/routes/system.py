"""
System endpoints - task introspection
"""

from typing import Any, Dict

from fastapi import APIRouter

from lifecycle.task_registry import TaskRegistry

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    Returns:
        - summary: Human-readable summary string
        - total / running / failed / cancelled counts
        - running_by_category: running tasks per TaskCategory
    """
    registry = TaskRegistry.instance()
    return {"summary": registry.summary(), **registry.summary_dict()}


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    """Detailed list of tracked tasks"""
    records = TaskRegistry.instance().list_all()
    tasks = [
        {
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "created_at": r.info.created_at,
            "finished_at": r.finished_at,
            "status": r.state,
            "error": repr(r.finished_with_error) if r.finished_with_error else None,
        }
        for r in records
    ]
    return {"count": len(tasks), "tasks": tasks}
