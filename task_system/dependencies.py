"""FastAPI dependencies: per-request session, wired services, caller identity."""

from typing import Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from task_system.auth_service import AuthenticationService
from task_system.errors import Unauthenticated
from task_system.repositories import PageRequest, TaskRepository, UserRepository
from task_system.schemas import UserDTO
from task_system.security import PasswordAuthenticator
from task_system.task_service import TaskService
from task_system.token_service import TokenService
from task_system.user_service import UserService

BEARER_PREFIX = "Bearer "


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


def get_auth_service(
    request: Request,
    user_service: UserService = Depends(get_user_service),
    token_service: TokenService = Depends(get_token_service),
) -> AuthenticationService:
    authenticator = PasswordAuthenticator(user_service, request.app.state.pwd_context)
    return AuthenticationService(user_service, token_service, authenticator)


def get_task_service(
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service),
) -> TaskService:
    return TaskService(TaskRepository(db), user_service)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        return token or None
    return None


def get_current_user(
    authorization: Optional[str] = Header(None),
    token_service: TokenService = Depends(get_token_service),
) -> UserDTO:
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthenticated("missing bearer token")
    # claims are trusted as issued; the user row is not re-read here
    return token_service.extract_user(token)


def get_page_request(
    request: Request,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort: Optional[str] = Query(None, max_length=50),
) -> PageRequest:
    config = request.app.state.config
    size = min(size or config.DEFAULT_PAGE_SIZE, config.MAX_PAGE_SIZE)
    return PageRequest(page=page, size=size, sort=sort)
