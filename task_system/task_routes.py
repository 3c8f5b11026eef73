from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import PlainTextResponse
from pydantic import EmailStr

from task_system.dependencies import get_current_user, get_page_request, get_task_service
from task_system.models import TaskPriority, TaskStatus
from task_system.repositories import MAX_ID, PageRequest
from task_system.schemas import Page, TaskDTO, UserDTO
from task_system.task_service import TaskService

router = APIRouter(prefix="/task", tags=["tasks"])


# ---------------------------------------------------------------------------
# Reads. Worker routes are registered first so "/task/worker/..." is never
# taken for an author email.
# ---------------------------------------------------------------------------
@router.get("/worker/{email}", response_model=Page[TaskDTO])
def tasks_by_worker(
    email: EmailStr = Path(...),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_by_worker_email(email, page_request)


@router.get("/worker/{email}/status", response_model=Page[TaskDTO])
def tasks_by_worker_and_status(
    status: TaskStatus,
    email: EmailStr = Path(...),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_by_worker_email(email, page_request, status=status)


@router.get("/worker/{email}/priority", response_model=Page[TaskDTO])
def tasks_by_worker_and_priority(
    priority: TaskPriority,
    email: EmailStr = Path(...),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_by_worker_email(email, page_request, priority=priority)


@router.get("", response_model=Page[TaskDTO])
def my_tasks(
    user: UserDTO = Depends(get_current_user),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_authored_by(user, page_request)


@router.get("/{email}", response_model=Page[TaskDTO])
def tasks_by_author(
    email: EmailStr = Path(...),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_by_author_email(email, page_request)


@router.get("/{email}/status", response_model=Page[TaskDTO])
def tasks_by_author_and_status(
    status: TaskStatus,
    email: EmailStr = Path(...),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_by_author_email(email, page_request, status=status)


@router.get("/{email}/priority", response_model=Page[TaskDTO])
def tasks_by_author_and_priority(
    priority: TaskPriority,
    email: EmailStr = Path(...),
    page_request: PageRequest = Depends(get_page_request),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.list_tasks_by_author_email(email, page_request, priority=priority)


# ---------------------------------------------------------------------------
# Writes (author only)
# ---------------------------------------------------------------------------
@router.post("", response_model=TaskDTO)
def add_task(
    title: str = Query(..., min_length=1, max_length=255),
    comment: str = Query("", max_length=1000),
    priority: TaskPriority = Query(TaskPriority.Low),
    user: UserDTO = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.add_task(user, title, comment, priority)


@router.put("", response_model=TaskDTO)
def edit_task(
    task_id: int = Query(..., alias="taskID", ge=1, le=MAX_ID),
    title: str = Query(..., min_length=1, max_length=255),
    comment: str = Query("", max_length=1000),
    user: UserDTO = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.edit_task(user, task_id, title, comment)


@router.delete("", response_class=PlainTextResponse)
def delete_task(
    task_id: int = Query(..., alias="taskID", ge=1, le=MAX_ID),
    user: UserDTO = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    tasks.delete_task(user, task_id)
    return "Task deleted"


@router.put("/status", response_model=TaskDTO)
def change_status(
    status: TaskStatus,
    task_id: int = Query(..., alias="taskID", ge=1, le=MAX_ID),
    user: UserDTO = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.change_status(user, task_id, status)


@router.put("/worker", response_model=TaskDTO)
def add_worker(
    email: EmailStr = Query(...),
    task_id: int = Query(..., alias="taskID", ge=1, le=MAX_ID),
    user: UserDTO = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.add_worker(user, task_id, email)


@router.delete("/worker", response_model=TaskDTO)
def remove_worker(
    email: EmailStr = Query(...),
    task_id: int = Query(..., alias="taskID", ge=1, le=MAX_ID),
    user: UserDTO = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    return tasks.remove_worker(user, task_id, email)
