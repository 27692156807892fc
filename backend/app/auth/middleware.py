from typing import Optional
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.auth.jwt_manager import jwt_manager
from app.auth.rate_limiter import rate_limiter
from app.core.errors import AuthenticationError

# Security scheme for FastAPI; missing credentials are reported by us, not by HTTPBearer
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Context class to hold current user information."""
    def __init__(self, user_id: int):
        self.user_id = user_id

    def __repr__(self) -> str:
        return f"CurrentUser(user_id={self.user_id})"


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """Dependency to get the current authenticated user."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    # Verify token
    payload = jwt_manager.verify_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Token subject is not a user id")

    return CurrentUser(user_id=user_id)


async def check_api_rate_limit(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency to check API rate limiting."""
    if not rate_limiter.check_api_rate_limit(current_user.user_id):
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
    return current_user
