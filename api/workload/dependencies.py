from typing import Generator, Optional
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from constants.auth import LOCAL_OWNER_ID
from settings.database import get_db
from services.auth import verify_token, _is_local_environment
from api.workload.infra.db.uow import UnitOfWork


class AuthContext:
    """Owner identity extracted from the bearer token."""

    def __init__(self, owner_id: int):
        self.owner_id = owner_id


# Optional security - doesn't auto-raise 403 when no Bearer token is provided
_optional_security = HTTPBearer(auto_error=False)


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(_optional_security),
) -> AuthContext:
    """
    Extract the owner from a verified token.

    In local development, returns the configured local owner when no auth
    header is provided. Everywhere else a valid token is required.
    """
    if credentials:
        user = verify_token(credentials)

        if user.status != "Success" or not user.data:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=user.error or "Authentication failed"
            )

        return AuthContext(owner_id=int(user.data["user_id"]))

    if _is_local_environment():
        return AuthContext(owner_id=int(LOCAL_OWNER_ID))

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required"
    )


def get_uow(db: Session = Depends(get_db)) -> Generator[UnitOfWork, None, None]:
    """
    Dependency to get Unit of Work instance.

    Args:
        db: Database session

    Yields:
        UnitOfWork instance
    """
    uow = UnitOfWork(db)
    yield uow
