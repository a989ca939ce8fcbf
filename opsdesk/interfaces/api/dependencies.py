"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from opsdesk.domain.entities import User
from opsdesk.infrastructure.database import get_db
from opsdesk.infrastructure.repositories import UserRepository

USER_ID_HEADER = "X-User-Id"


def get_current_user(
    user_id: int | None = Header(default=None, alias=USER_ID_HEADER),
    db: Session = Depends(get_db),
) -> User:
    """Return the user the upstream gateway authenticated for this request."""

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )

    user = UserRepository(db).get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Inactive user",
        )
    return user


__all__ = ["USER_ID_HEADER", "get_current_user"]
