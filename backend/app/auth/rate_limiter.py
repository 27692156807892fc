import time
import hashlib
from typing import Dict
from collections import defaultdict
import threading

from app.core.config import settings


class RateLimiter:
    """Thread-safe sliding-window rate limiter keyed by user."""

    def __init__(self, api_rate_limit: int = settings.rate_limit_crud_per_minute, window_seconds: int = 60):
        self._lock = threading.Lock()
        self._attempts: Dict[str, list] = defaultdict(list)

        # Rate limiting configuration
        self.api_rate_limit = api_rate_limit  # requests per window
        self.window_seconds = window_seconds

    def _clean_old_attempts(self, key: str, window_seconds: int):
        """Remove attempts older than the window."""
        now = time.time()
        cutoff = now - window_seconds
        recent = [attempt for attempt in self._attempts.get(key, []) if attempt > cutoff]
        if recent:
            self._attempts[key] = recent
        else:
            # Idle keys are dropped so the table only holds active users
            self._attempts.pop(key, None)

    def _prune(self):
        """Drop every key whose attempts have all left the window."""
        for key in list(self._attempts):
            self._clean_old_attempts(key, self.window_seconds)

    def _get_key(self, identifier: str, action: str) -> str:
        """Generate a key for rate limiting."""
        return f"{action}:{hashlib.sha256(identifier.encode()).hexdigest()[:16]}"

    def check_api_rate_limit(self, user_id: int) -> bool:
        """Check and record one API request for a user."""
        with self._lock:
            key = self._get_key(str(user_id), "api")

            self._clean_old_attempts(key, self.window_seconds)

            # Check if under limit
            if len(self._attempts.get(key, [])) < self.api_rate_limit:
                self._attempts[key].append(time.time())
                return True
            else:
                return False

    def reset_user_limits(self, user_id: int):
        """Reset all rate limits for a user."""
        with self._lock:
            suffix = hashlib.sha256(str(user_id).encode()).hexdigest()[:16]
            for key in [key for key in self._attempts if key.endswith(suffix)]:
                del self._attempts[key]

    def reset(self):
        """Forget every tracked request."""
        with self._lock:
            self._attempts.clear()

    def get_stats(self) -> Dict[str, int]:
        """Get rate limiter statistics."""
        with self._lock:
            self._prune()
            return {
                "active_rate_limits": len(self._attempts),
                "total_attempts_tracked": sum(len(attempts) for attempts in self._attempts.values())
            }


# Global rate limiter instance
rate_limiter = RateLimiter()
