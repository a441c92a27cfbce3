import hashlib
import time
from supabase import Client
from salon_backend.modules.auth.schemas import LoginRequest, TokenResponse
from salon_backend.modules.authorization.domain import Principal, Role
from salon_backend.database.supabase_client import SupabaseClient
from salon_backend.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _evict_expired(now: float) -> None:
    for key, (_, expiry) in list(_AUTH_USER_CACHE.items()):
        if now >= expiry:
            del _AUTH_USER_CACHE[key]


def principal_from_user(user_data: Optional[Dict[str, Any]]) -> Optional[Principal]:
    """Build the request Principal from verified user data. Unknown or missing role yields None."""
    if not user_data or not user_data.get("id"):
        return None
    raw_role = (user_data.get("app_metadata") or {}).get("role")
    try:
        role = Role(raw_role)
    except ValueError:
        logger.warning(f"User {user_data['id']} has no recognised role: {raw_role!r}")
        return None
    return Principal(id=user_data["id"], role=role)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
            }
            if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
                _evict_expired(now)
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        try:
            # Tokens are stateless JWTs; drop our cached copy and let Supabase end the session
            _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Logout failed: {e}")
            return False

    def set_role(self, user_id: str, role: Role) -> bool:
        """Set the application role in app_metadata (requires service role key)"""
        if not settings.supabase_service_role_key:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot update app_metadata."
            )
        try:
            admin_client = SupabaseClient.get_service_client()
            response = admin_client.auth.admin.update_user_by_id(
                user_id,
                {"app_metadata": {"role": role.value}}
            )

            if not response.user:
                raise HTTPException(status_code=404, detail="User not found")

            # Cached entries for this user would keep the old role until expiry
            for key, (user_data, _) in list(_AUTH_USER_CACHE.items()):
                if user_data.get("id") == user_id:
                    _AUTH_USER_CACHE.pop(key, None)

            logger.info(f"Role of user {user_id} set to {role.value}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(
                status_code=500,
                detail=f"Failed to update role: {str(e)}"
            )
