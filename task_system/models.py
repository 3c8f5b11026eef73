import enum

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import relationship

from task_system.database import Base

DEFAULT_ROLE = "User"


class TaskStatus(str, enum.Enum):
    Received = "Received"
    In_progress = "In_progress"
    Done = "Done"


class TaskPriority(str, enum.Enum):
    Low = "Low"
    Medium = "Medium"
    High = "High"


task_workers = Table(
    "task_workers",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    nickname = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False, default=DEFAULT_ROLE)

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r}>"


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (UniqueConstraint("author_id", "title", name="uq_task_author_title"),)

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    comment = Column(String(1000), nullable=False, default="")
    status = Column(Enum(TaskStatus), nullable=False, default=TaskStatus.Received)
    priority = Column(Enum(TaskPriority), nullable=False, default=TaskPriority.Low)

    author = relationship("User", lazy="joined")
    workers = relationship("User", secondary=task_workers, lazy="selectin", order_by=User.id)

    def has_worker(self, user: User) -> bool:
        return any(w.id == user.id for w in self.workers)

    def add_worker(self, user: User) -> None:
        self.workers.append(user)

    def remove_worker(self, user: User) -> None:
        self.workers = [w for w in self.workers if w.id != user.id]

    def __repr__(self):
        return f"<Task id={self.id} title={self.title!r}>"
