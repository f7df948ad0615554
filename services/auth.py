from datetime import datetime, timedelta, UTC
from typing import Optional, Dict, Any
import os

import jwt
from jwt import PyJWTError
from fastapi import HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.engine import make_url

from common.logger import logger
from constants.auth import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

LOCAL_DB_HOSTS = {"localhost", "127.0.0.1", "::1"}


class ResponseModel:
    def __init__(self, status: str = "Success", data: dict = None, error: str = None):
        self.status = status
        self.data = data
        self.error = error


def _effective_db_host() -> Optional[str]:
    """Host of the database the service connects to; the full URL wins."""
    database_url = os.environ.get("TASKFLOW_DATABASE_URL")
    if database_url:
        return make_url(database_url).host
    return os.environ.get("TASKFLOW_DB_HOST")


def _is_local_environment() -> bool:
    """Check if running in local development (not QA/prod).

    Local means the effective database has no host (SQLite, unix socket) or
    points at this machine. QA/prod always connect to a real DB host.
    """
    db_host = (_effective_db_host() or "").lower()
    return not db_host or db_host in LOCAL_DB_HOSTS


def create_jwt_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a new JWT token with the given data and expiration
    """
    try:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(UTC) + expires_delta
        else:
            expire = datetime.now(UTC) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

        to_encode.update({"exp": expire})

        return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

    except Exception as e:
        raise Exception(f"Error creating token: {str(e)}")


def decode_jwt(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except PyJWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )


security = HTTPBearer()

def verify_token(credentials: HTTPAuthorizationCredentials = Security(security)) -> ResponseModel:
    response = ResponseModel()
    payload = decode_jwt(credentials.credentials)

    if "user_id" not in payload:
        logger.info("Token rejected: no user_id claim")
        response.status = "Failure"
        response.error = "User ID not found in token"
        return response

    response.data = {
        "user_id": payload["user_id"],
        "email": payload.get("email", ""),
    }
    return response
