"""Service-layer exceptions. The HTTP boundary maps each one to a status code."""


class TaskSystemError(Exception):
    pass


class NotFound(TaskSystemError):
    """Entity is absent, or exists but is not owned by the requester."""


class AlreadyExists(TaskSystemError):
    pass


class ValidationFailed(TaskSystemError):
    pass


class AuthenticationFailed(TaskSystemError):
    pass


class Unauthenticated(TaskSystemError):
    """No usable bearer token on the request."""


class TokenInvalid(Unauthenticated):
    """Token signature, structure or expiry check failed."""
