"""Caller identity resolution.

Accounts use plaintext credentials checked at login; afterwards the client
identifies itself by username, either in the request body (chat and activity
endpoints) or as ``Authorization: Bearer <username>`` (admin endpoints).
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from backend.app.api.deps import Users
from backend.app.db.context import RequestContext
from backend.app.db.repositories import UserRepository

LOGIN_REQUIRED = "Please log in to access PDFs."
UNKNOWN_USER = "Invalid user. Please log in again."


async def identify_caller(username: str | None, users: UserRepository) -> RequestContext:
    """Resolve a username to a request context.

    Args:
        username: Identity claimed by the client
        users: Account repository

    Returns:
        RequestContext for a known user

    Raises:
        HTTPException: 403 if the username is missing or unknown
    """
    if not username:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=LOGIN_REQUIRED)

    account = await users.get_user(username)
    if account is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=UNKNOWN_USER)

    return RequestContext(
        username=account.username,
        role=account.role,
        branch=account.branch,
        year=account.year,
    )


async def get_current_context(
    users: Users,
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Extract request context from the authorization header.

    Raises:
        HTTPException: 401 if the header is missing, malformed or names an
            unknown user
    """
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    username = authorization[7:].strip()  # Strip "Bearer "

    try:
        return await identify_caller(username, users)
    except HTTPException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.detail,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def require_admin(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
) -> RequestContext:
    """Allow only admin callers.

    Raises:
        HTTPException: 403 for non-admin callers
    """
    if not ctx.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return ctx


AdminContext = Annotated[RequestContext, Depends(require_admin)]
