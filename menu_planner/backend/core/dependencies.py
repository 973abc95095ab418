"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.database import get_db_session
from menu_planner.backend.core.exceptions import AuthenticationError
from menu_planner.backend.core.logging import get_logger
from menu_planner.backend.core.security import read_session_token
from menu_planner.backend.models.user import User
from menu_planner.backend.repositories.user import UserRepository

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer = HTTPBearer(auto_error=False)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """
    Extract or generate request ID from headers.

    Used for request tracing and correlation.
    """
    return x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    """
    Resolve the signed-in user from the bearer token.

    Raises:
        AuthenticationError: If there is no session or it is no longer valid
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Authentication required")

    user_id = read_session_token(credentials.credentials)
    user = await UserRepository(db).get_by_id_or_none(user_id)
    if user is None:
        logger.warning("Token for unknown user", extra={"user_id": user_id})
        raise AuthenticationError("Authentication required")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
