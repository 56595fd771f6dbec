"""
Dependencies for FastAPI: storage access and the admin guard
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import structlog

from sportsbar.core.auth import verify_token
from sportsbar.models.user import User
from sportsbar.storage.base import Storage

logger = structlog.get_logger(__name__)
security = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    """Storage adapter built once by the application lifespan"""
    return request.app.state.storage


def get_current_admin(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    storage: Storage = Depends(get_storage),
) -> User:
    """Resolve the admin account behind the bearer token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    user_id = verify_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = storage.get_user(user_id)
    if user is None:
        raise credentials_exception

    logger.debug(f"User authenticated: {user_id}")
    return user
