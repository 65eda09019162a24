# storefront/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordBearer

from .config import Settings
from .deps import get_app_settings, get_storage
from .errors import AuthorizationError
from .schemas import AdminLogin, Token, User
from .security import create_access_token, decode_access_token, verify_password
from .storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["auth"])

# auto_error=False: the guard decides, since auth can be switched off
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login", auto_error=False)


# ✅ Admin login
@router.post("/login", response_model=Token)
async def admin_login(
    payload: AdminLogin,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    user = await storage.get_user_by_username(payload.username)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.warning("Failed admin login for %r", payload.username)
        raise AuthorizationError("Invalid username or password", status_code=401)
    if not user.is_admin:
        raise AuthorizationError("Admin access required", status_code=403)

    token = create_access_token(
        {"sub": user.username},
        settings.jwt_secret,
        settings.jwt_algorithm,
        settings.access_token_expire_minutes,
    )
    logger.info("Admin %s logged in", user.username)
    return Token(access_token=token)


# ✅ Token check for every /api/admin route
async def require_admin(
    token: Optional[str] = Depends(oauth2_scheme),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> Optional[User]:
    if not settings.admin_auth_required:
        return None
    if not token:
        raise AuthorizationError("Not authenticated", status_code=401)

    payload = decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
    username = payload.get("sub") if payload else None
    if not username:
        raise AuthorizationError("Invalid token", status_code=401)

    user = await storage.get_user_by_username(username)
    if user is None:
        raise AuthorizationError("User not found", status_code=401)
    if not user.is_admin:
        raise AuthorizationError("Admin access required", status_code=403)
    return user
