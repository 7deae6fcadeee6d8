"""
Rate Limiter - Control how often a user can trigger AI analysis.

Each generation is a paid call to a hosted model, so requests to
POST /api/analysis/generate are limited per user with a simple
in-memory sliding window.

For deployments with multiple instances, upgrade to a Redis-backed limiter.
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple
import threading

from knowyourself.core.logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Simple sliding window rate limiter.

    Example:
        >>> limiter = RateLimiter(requests_per_minute=5)
        >>> limiter.is_allowed("user-123")
        (True, 4)
    """

    def __init__(
        self,
        requests_per_minute: int = 5,
        cleanup_interval_minutes: int = 5
    ):
        """
        Initialize the rate limiter.

        Args:
            requests_per_minute: Maximum requests allowed per minute
            cleanup_interval_minutes: How often to clean old entries
        """
        self.limit = requests_per_minute
        self.window = timedelta(minutes=1)
        self.cleanup_interval = timedelta(minutes=cleanup_interval_minutes)

        self._requests: Dict[str, List[datetime]] = {}
        self._lock = threading.RLock()
        self._last_cleanup = datetime.utcnow()

        logger.info(f"RateLimiter initialized: {requests_per_minute} requests/minute")

    def is_allowed(self, identifier: str) -> Tuple[bool, int]:
        """
        Check if a request is allowed for the given identifier.

        Args:
            identifier: User ID

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        with self._lock:
            self._maybe_cleanup()

            now = datetime.utcnow()
            cutoff = now - self.window

            recent = [t for t in self._requests.get(identifier, []) if t > cutoff]
            self._requests[identifier] = recent

            if len(recent) >= self.limit:
                logger.warning(f"Rate limit exceeded for user: {identifier[:8]}...")
                return False, 0

            recent.append(now)
            return True, self.limit - len(recent)

    def get_reset_time(self, identifier: str) -> datetime:
        """
        Get when the rate limit resets for an identifier.

        Returns:
            Datetime when oldest request expires
        """
        with self._lock:
            if not self._requests.get(identifier):
                return datetime.utcnow()

            oldest = min(self._requests[identifier])
            return oldest + self.window

    def retry_after_seconds(self, identifier: str) -> int:
        """Seconds until the next request for identifier would be allowed (at least 1)."""
        reset_time = self.get_reset_time(identifier)
        return max(1, int((reset_time - datetime.utcnow()).total_seconds()))

    def _maybe_cleanup(self) -> None:
        """Remove old entries periodically."""
        now = datetime.utcnow()

        if now - self._last_cleanup < self.cleanup_interval:
            return

        cutoff = now - self.window

        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [
                t for t in self._requests[identifier] if t > cutoff
            ]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now
        logger.debug(f"Rate limiter cleanup: {len(self._requests)} active users")


# Global rate limiter instance
_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get or create the global analysis rate limiter."""
    global _rate_limiter
    if _rate_limiter is None:
        from knowyourself.core.config import get_settings
        settings = get_settings()
        _rate_limiter = RateLimiter(
            requests_per_minute=settings.analysis_rate_limit_per_minute
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Drop the global limiter so the next call builds a fresh one."""
    global _rate_limiter
    _rate_limiter = None
