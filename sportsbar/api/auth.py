"""
Admin authentication API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
import structlog

from sportsbar.api.errors import storage_error
from sportsbar.core.auth import create_access_token, hash_password, verify_password, verify_token
from sportsbar.core.dependencies import get_current_admin, get_storage, security
from sportsbar.models.user import User
from sportsbar.schemas.token import TokenResponse
from sportsbar.schemas.user import UserCreate, UserLogin, UserResponse
from sportsbar.storage.base import Storage
from sportsbar.storage.errors import StorageError

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserCreate,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    storage: Storage = Depends(get_storage)
):
    """Register an admin account

    The first account can be created without a token; after that only a
    signed-in admin may add accounts.
    """
    if storage.has_users():
        admin_id = verify_token(credentials.credentials) if credentials else None
        if admin_id is None or storage.get_user(admin_id) is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Only an admin can register new accounts",
                headers={"WWW-Authenticate": "Bearer"},
            )

    try:
        user = storage.create_user(user_data, hash_password(user_data.password))
    except StorageError as e:
        raise storage_error(e)

    logger.info(f"User registered: {user.id}")
    return user


@router.post("/login", response_model=TokenResponse)
def login_user(login_data: UserLogin, storage: Storage = Depends(get_storage)):
    """Login user"""
    user = storage.get_user_by_username(login_data.username)
    if user is None or not verify_password(login_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    logger.info(f"User logged in: {user.id}")
    return TokenResponse(
        access_token=create_access_token(user_id=user.id, username=user.username),
        user_id=user.id,
        username=user.username,
    )


@router.post("/logout")
def logout_user():
    """Tokens are stateless; the client just forgets its token"""
    return {"success": True}


@router.get("/me", response_model=UserResponse)
def get_current_user_info(user: User = Depends(get_current_admin)):
    """Get current user info"""
    return user
