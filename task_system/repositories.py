"""SQLAlchemy-backed stores for users and tasks."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from task_system.errors import AlreadyExists, ValidationFailed
from task_system.models import Task, TaskPriority, TaskStatus, User

# largest value a signed 64-bit INTEGER column or OFFSET can hold
MAX_ID = 2**63 - 1

SORTABLE_FIELDS = {
    "id": Task.id,
    "title": Task.title,
    "status": Task.status,
    "priority": Task.priority,
}


def _commit(db: Session, conflict_message: str) -> None:
    # unique constraints back up the service-level existence checks
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AlreadyExists(conflict_message) from e


@dataclass
class PageRequest:
    page: int = 0
    size: int = 20
    sort: Optional[str] = None

    def order_by(self):
        if not self.sort:
            return [Task.id.asc()]
        field, _, direction = self.sort.partition(",")
        column = SORTABLE_FIELDS.get(field.strip())
        if column is None:
            raise ValidationFailed(f"cannot sort by {field!r}")
        direction = direction.strip().lower() or "asc"
        if direction not in ("asc", "desc"):
            raise ValidationFailed(f"unknown sort direction {direction!r}")
        primary = column.desc() if direction == "desc" else column.asc()
        return [primary, Task.id.asc()]

    def offset(self) -> int:
        offset = self.page * self.size
        if offset > MAX_ID:
            raise ValidationFailed(f"page {self.page} is out of range")
        return offset


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def save(self, user: User) -> User:
        self.db.add(user)
        _commit(self.db, "User already exists")
        self.db.refresh(user)
        return user


class TaskRepository:
    def __init__(self, db: Session):
        self.db = db

    def _paged(self, query, page_request: PageRequest) -> Tuple[List[Task], int]:
        total = query.count()
        items = (
            query.order_by(*page_request.order_by())
            .offset(page_request.offset())
            .limit(page_request.size)
            .all()
        )
        return items, total

    @staticmethod
    def _filtered(query, status: Optional[TaskStatus], priority: Optional[TaskPriority]):
        if status is not None:
            query = query.filter(Task.status == status)
        if priority is not None:
            query = query.filter(Task.priority == priority)
        return query

    def find_all_by_author_email(
        self,
        email: str,
        page_request: PageRequest,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Tuple[List[Task], int]:
        query = self.db.query(Task).join(Task.author).filter(User.email == email)
        return self._paged(self._filtered(query, status, priority), page_request)

    def find_all_by_worker_email(
        self,
        email: str,
        page_request: PageRequest,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
    ) -> Tuple[List[Task], int]:
        query = self.db.query(Task).join(Task.workers).filter(User.email == email)
        return self._paged(self._filtered(query, status, priority), page_request)

    def find_by_id_and_author_email(self, task_id: int, email: str) -> Optional[Task]:
        return (
            self.db.query(Task)
            .join(Task.author)
            .filter(Task.id == task_id, User.email == email)
            .first()
        )

    def exists_by_title_and_author_email(self, title: str, email: str) -> bool:
        query = self.db.query(Task.id).join(Task.author).filter(Task.title == title, User.email == email)
        return query.first() is not None

    def save(self, task: Task) -> Task:
        self.db.add(task)
        _commit(self.db, "Task conflicts with an existing one")
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()
