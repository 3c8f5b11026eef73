from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from task_system.models import TaskPriority, TaskStatus

T = TypeVar("T")


class SignUpRequest(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=20)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)


class JwtTokenResponse(BaseModel):
    token: str


class UserDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nickname: str
    email: str
    role: str


class TaskDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author: UserDTO
    workers: List[UserDTO]
    title: str
    status: TaskStatus
    priority: TaskPriority
    comment: str


class Page(BaseModel, Generic[T]):
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
