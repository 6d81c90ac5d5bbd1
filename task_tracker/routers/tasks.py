from typing import Annotated, List

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ..models import Priority, TaskStatus
from ..schemas.task import TaskCreate, TaskFilter, TaskResponse, TaskStats, TaskUpdate
from ..services.tasks import TaskService

router = APIRouter()


def get_task_service(request: Request) -> TaskService:
    """Dependency returning the service bound to the app's task store."""
    return TaskService(request.app.state.task_store)


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Create a new task."""
    return service.create(task)


@router.get("/tasks", response_model=List[TaskResponse])
def get_tasks(
    filters: Annotated[TaskFilter, Query()],
    service: TaskService = Depends(get_task_service),
):
    """List tasks with optional filtering, search and sorting."""
    return service.list_tasks(filters)


# Fixed paths are registered before /tasks/{task_id} so they are not read as ids.

@router.get("/tasks/stats", response_model=TaskStats)
def get_stats(service: TaskService = Depends(get_task_service)):
    """Counts by status and the completion rate."""
    return service.get_stats()


@router.get("/tasks/overdue", response_model=List[TaskResponse])
def get_overdue_tasks(service: TaskService = Depends(get_task_service)):
    """Tasks past their due date that are not completed."""
    return service.find_overdue()


@router.get("/tasks/status/{task_status}", response_model=List[TaskResponse])
def get_tasks_by_status(task_status: TaskStatus, service: TaskService = Depends(get_task_service)):
    return service.find_by_status(task_status)


@router.get("/tasks/priority/{priority}", response_model=List[TaskResponse])
def get_tasks_by_priority(priority: Priority, service: TaskService = Depends(get_task_service)):
    return service.find_by_priority(priority)


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get a specific task by ID."""
    return service.get(task_id)


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
@router.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Update a specific task. Omitted or null fields are left as they are."""
    return service.update(task_id, task_update)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Delete a specific task."""
    service.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/tasks/{task_id}/complete", response_model=TaskResponse)
def mark_task_complete(task_id: str, service: TaskService = Depends(get_task_service)):
    """Mark a task as completed, stamping the completion time."""
    return service.mark_completed(task_id)


@router.patch("/tasks/{task_id}/in-progress", response_model=TaskResponse)
def mark_task_in_progress(task_id: str, service: TaskService = Depends(get_task_service)):
    return service.mark_in_progress(task_id)


@router.patch("/tasks/{task_id}/pending", response_model=TaskResponse)
def mark_task_pending(task_id: str, service: TaskService = Depends(get_task_service)):
    return service.mark_pending(task_id)
