"""Account models."""

from datetime import datetime

from pydantic import BaseModel

from backend.app.models.common import Role


class UserAccount(BaseModel):
    """Stored account, including the plaintext credential."""

    username: str
    password: str
    role: Role = Role.student
    branch: str
    year: str
    created_at: datetime


class UserProfile(BaseModel):
    """Public view of an account."""

    username: str
    role: Role
    branch: str
    year: str

    @classmethod
    def from_account(cls, account: UserAccount) -> "UserProfile":
        """Drop the credential from a stored account."""
        return cls(
            username=account.username,
            role=account.role,
            branch=account.branch,
            year=account.year,
        )
