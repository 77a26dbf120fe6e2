"""Request context for authenticated callers."""

from dataclasses import dataclass

from backend.app.models.common import Role


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller, resolved once per request.

    Passed explicitly into handlers; never stored globally.
    """

    username: str
    role: Role
    branch: str
    year: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin
