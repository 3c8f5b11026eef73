import logging

from task_system.errors import AlreadyExists
from task_system.models import DEFAULT_ROLE, User
from task_system.security import PasswordAuthenticator
from task_system.token_service import TokenService
from task_system.user_service import UserService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Registers new users and signs existing ones in. Both return a bearer token."""

    def __init__(
        self,
        user_service: UserService,
        token_service: TokenService,
        authenticator: PasswordAuthenticator,
    ):
        self.user_service = user_service
        self.token_service = token_service
        self.authenticator = authenticator

    def sign_up(self, email: str, username: str, password: str) -> str:
        if self.user_service.exists_by_email(email):
            raise AlreadyExists("User already exists")

        user = User(
            nickname=username,
            email=email,
            password=self.authenticator.hash_password(password),
            role=DEFAULT_ROLE,
        )
        user = self.user_service.save(user)
        logger.info("Registered user id=%s email=%s", user.id, user.email)
        return self.token_service.issue(user)

    def sign_in(self, email: str, password: str) -> str:
        self.authenticator.authenticate(email, password)
        user = self.user_service.get_user_by_email(email)
        return self.token_service.issue(user)
