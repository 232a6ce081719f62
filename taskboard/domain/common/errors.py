from __future__ import annotations


class DomainError(Exception):
    """Expected, user-facing outcome."""


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass


class InternalError(Exception):
    """
    Failure the caller cannot fix. Reported to clients as an opaque
    server error, logged in full on our side.
    """


class StorageError(InternalError):
    """A storage backend could not honour the repository contract (e.g. id collision)."""


class ConsistencyError(InternalError):
    """Two independently fetched collections disagree with each other."""


class UserProvisioningError(InternalError):
    def __init__(self, user_id: int, cause: BaseException) -> None:
        super().__init__(f"post-registration provisioning failed for user_id={user_id}: {cause}")
        self.user_id = user_id
        self.cause = cause
