from task_system.errors import NotFound
from task_system.models import User
from task_system.repositories import UserRepository


class UserService:
    """Credential store: resolves identities by email."""

    def __init__(self, users: UserRepository):
        self.users = users

    def get_user_by_email(self, email: str) -> User:
        user = self.users.find_by_email(email)
        if user is None:
            raise NotFound(f"User not found with email: {email}")
        return user

    def exists_by_email(self, email: str) -> bool:
        return self.users.exists_by_email(email)

    def save(self, user: User) -> User:
        return self.users.save(user)
