"""
Task operations with author-only mutation.

Every mutating operation goes through ``_owned_task``, which looks a task up by
id AND author email in a single query. A task that exists but belongs to
someone else is reported exactly like a missing one, so callers cannot learn
which ids other users own.
"""

import logging
import math
from typing import Optional

from task_system.errors import AlreadyExists, NotFound
from task_system.models import Task, TaskPriority, TaskStatus
from task_system.repositories import PageRequest, TaskRepository
from task_system.schemas import Page, TaskDTO, UserDTO
from task_system.user_service import UserService

logger = logging.getLogger(__name__)


def to_page(items, total: int, page_request: PageRequest) -> Page[TaskDTO]:
    return Page[TaskDTO](
        content=[TaskDTO.model_validate(t) for t in items],
        page=page_request.page,
        size=page_request.size,
        total_elements=total,
        total_pages=math.ceil(total / page_request.size) if page_request.size else 0,
    )


class TaskService:
    def __init__(self, tasks: TaskRepository, user_service: UserService):
        self.tasks = tasks
        self.user_service = user_service

    def _owned_task(self, task_id: int, requester: UserDTO) -> Task:
        task = self.tasks.find_by_id_and_author_email(task_id, requester.email)
        if task is None:
            logger.info("Task %s not found for author %s", task_id, requester.email)
            raise NotFound(f"Task {task_id} not found")
        return task

    # -- reads ---------------------------------------------------------------

    def list_tasks_authored_by(self, requester: UserDTO, page_request: PageRequest) -> Page[TaskDTO]:
        items, total = self.tasks.find_all_by_author_email(requester.email, page_request)
        return to_page(items, total, page_request)

    def list_tasks_by_author_email(
        self,
        email: str,
        page_request: PageRequest,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Page[TaskDTO]:
        items, total = self.tasks.find_all_by_author_email(email, page_request, status, priority)
        return to_page(items, total, page_request)

    def list_tasks_by_worker_email(
        self,
        email: str,
        page_request: PageRequest,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Page[TaskDTO]:
        items, total = self.tasks.find_all_by_worker_email(email, page_request, status, priority)
        return to_page(items, total, page_request)

    # -- writes --------------------------------------------------------------

    def add_task(
        self,
        requester: UserDTO,
        title: str,
        comment: str = "",
        priority: TaskPriority = TaskPriority.Low,
    ) -> TaskDTO:
        if self.tasks.exists_by_title_and_author_email(title, requester.email):
            raise AlreadyExists("Task with this title already exists")

        task = Task(
            author=self.user_service.get_user_by_email(requester.email),
            workers=[],
            title=title,
            comment=comment or "",
            status=TaskStatus.Received,
            priority=priority or TaskPriority.Low,
        )
        task = self.tasks.save(task)
        logger.info("Task %s created by %s", task.id, requester.email)
        return TaskDTO.model_validate(task)

    def edit_task(self, requester: UserDTO, task_id: int, title: str, comment: str = "") -> TaskDTO:
        task = self._owned_task(task_id, requester)
        task.title = title
        task.comment = comment or ""
        return TaskDTO.model_validate(self.tasks.save(task))

    def change_status(self, requester: UserDTO, task_id: int, new_status: TaskStatus) -> TaskDTO:
        # flat overwrite: any status may follow any other
        task = self._owned_task(task_id, requester)
        task.status = new_status
        return TaskDTO.model_validate(self.tasks.save(task))

    def add_worker(self, requester: UserDTO, task_id: int, worker_email: str) -> TaskDTO:
        task = self._owned_task(task_id, requester)
        worker = self.user_service.get_user_by_email(worker_email)

        if task.has_worker(worker):
            raise AlreadyExists(f"Worker {worker_email} already in workers list")

        task.add_worker(worker)
        task = self.tasks.save(task)
        logger.info("Worker %s added to task %s", worker_email, task_id)
        return TaskDTO.model_validate(task)

    def remove_worker(self, requester: UserDTO, task_id: int, worker_email: str) -> TaskDTO:
        task = self._owned_task(task_id, requester)
        worker = self.user_service.get_user_by_email(worker_email)

        if task.has_worker(worker):
            task.remove_worker(worker)
            task = self.tasks.save(task)
            logger.info("Worker %s removed from task %s", worker_email, task_id)
        return TaskDTO.model_validate(task)

    def delete_task(self, requester: UserDTO, task_id: int) -> None:
        task = self._owned_task(task_id, requester)
        self.tasks.delete(task)
        logger.info("Task %s deleted by %s", task_id, requester.email)
