import logging

from passlib.context import CryptContext

from task_system.errors import AuthenticationFailed, NotFound
from task_system.models import User
from task_system.user_service import UserService

logger = logging.getLogger(__name__)


def make_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class PasswordAuthenticator:
    """Checks an email/password pair against the stored bcrypt hash."""

    def __init__(self, user_service: UserService, pwd_context: CryptContext):
        self.user_service = user_service
        self.pwd_context = pwd_context

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        return self.pwd_context.verify(plain, hashed)

    def authenticate(self, email: str, password: str) -> User:
        try:
            user = self.user_service.get_user_by_email(email)
        except NotFound:
            logger.warning("Sign-in failed for %s: unknown email", email)
            raise AuthenticationFailed("Bad credentials") from None
        if not self.verify_password(password, user.password):
            logger.warning("Sign-in failed for %s: wrong password", email)
            raise AuthenticationFailed("Bad credentials")
        return user
