"""Account endpoints - POST /api/register, POST /api/login."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from backend.app.api.deps import Users
from backend.app.db.repositories import DuplicateUserError
from backend.app.models.common import Role
from backend.app.models.users import UserProfile

router = APIRouter(prefix="/api", tags=["accounts"])
logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    """Request body for POST /api/register.

    Fields are optional at the schema level so missing values get the
    portal's 400 message instead of a schema error.
    """

    username: str | None = None
    password: str | None = None
    role: Role = Role.student
    branch: str | None = None
    year: str | None = None


class LoginRequest(BaseModel):
    """Request body for POST /api/login."""

    username: str | None = None
    password: str | None = None


class AccountResponse(UserProfile):
    """Profile returned after register/login."""

    ok: bool = True


@router.post("/register", response_model=AccountResponse)
async def register(request: RegisterRequest, users: Users) -> AccountResponse:
    """Create a student or admin account.

    Raises:
        HTTPException: 400 for missing fields or a taken username
    """
    if not (request.username and request.password and request.branch and request.year):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username, password, branch and year are required",
        )

    try:
        account = await users.create_user(
            username=request.username,
            password=request.password,
            role=request.role,
            branch=request.branch,
            year=request.year,
        )
    except DuplicateUserError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists"
        ) from e

    logger.info(f"[POST /api/register] username={account.username} role={account.role.value}")
    return AccountResponse(**UserProfile.from_account(account).model_dump())


@router.post("/login", response_model=AccountResponse)
async def login(request: LoginRequest, users: Users) -> AccountResponse:
    """Check credentials and return the profile.

    Raises:
        HTTPException: 400 for missing credentials, unknown user or wrong password
    """
    if not request.username or not request.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing credentials")

    account = await users.get_user(request.username)
    if account is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid username")

    if account.password != request.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid password")

    return AccountResponse(**UserProfile.from_account(account).model_dump())
