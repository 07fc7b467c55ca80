"""
/tasks — missions broken down by the planner; subtask completion pays points.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from ...api.schemas import SubTaskOut, TaskIn, TaskOut, ToggleOut

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _get_coordinator(request: Request):
    return request.app.state.coordinator


def _get_services(request: Request):
    return request.app.state.services


def _task_out(task) -> TaskOut:
    return TaskOut(
        id=task.id,
        title=task.title,
        points=task.points,
        completed=task.completed,
        subtasks=[
            SubTaskOut(id=s.id, title=s.title, points=s.points, completed=s.completed)
            for s in task.subtasks
        ],
    )


@router.get("", response_model=List[TaskOut])
def get_tasks(coord=Depends(_get_coordinator)):
    return [_task_out(t) for t in coord.tasks.all_tasks()]


@router.post("", response_model=TaskOut, status_code=201)
async def add_task(
    task: TaskIn,
    coord=Depends(_get_coordinator),
    services=Depends(_get_services),
):
    """Break the task down into subtasks and add it to the board."""
    title = task.title.strip()
    if not title:
        raise HTTPException(status_code=422, detail="Task title is empty")
    drafts = await services["planner"].breakdown(title)
    t = coord.tasks.add_task(title, [(d.title, d.points) for d in drafts])
    return _task_out(t)


@router.post("/{task_id}/subtasks/{subtask_id}/toggle", response_model=ToggleOut)
async def toggle_subtask(task_id: str, subtask_id: str, coord=Depends(_get_coordinator)):
    try:
        awarded = coord.toggle_subtask(task_id, subtask_id)
        task = coord.tasks.get(task_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Task or subtask not found")
    return ToggleOut(task=_task_out(task), points_awarded=awarded)


@router.delete("/{task_id}")
async def remove_task(task_id: str, coord=Depends(_get_coordinator)):
    removed = coord.tasks.remove_task(task_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"status": "removed"}
