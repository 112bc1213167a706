"""
Temporary storage for autofill import sessions.

Sessions live in process memory with a sliding TTL: every read pushes the
expiry forward. Single-server only.
"""
from datetime import datetime, timedelta
from typing import Any, Optional

_cache: dict[str, tuple[datetime, Any]] = {}
DEFAULT_TTL_MINUTES = 30


def store_session(session_id: str, session: Any, ttl_minutes: int = DEFAULT_TTL_MINUTES) -> None:
    """Store a session under its id."""
    _cache[session_id] = (_expiry(ttl_minutes), session)
    _cleanup_expired()


def retrieve_session(session_id: str, ttl_minutes: int = DEFAULT_TTL_MINUTES) -> Optional[Any]:
    """Retrieve a session and refresh its expiry. Returns None if expired/not found."""
    entry = _cache.get(session_id)
    if entry is None:
        return None
    expires_at, session = entry
    if datetime.now() > expires_at:
        del _cache[session_id]
        return None
    _cache[session_id] = (_expiry(ttl_minutes), session)
    return session


def delete_session(session_id: str) -> None:
    """Remove a session after submit or discard."""
    _cache.pop(session_id, None)


def clear_sessions() -> None:
    """Drop every session."""
    _cache.clear()


def _expiry(ttl_minutes: int) -> datetime:
    return datetime.now() + timedelta(minutes=ttl_minutes)


def _cleanup_expired() -> None:
    """Remove all expired entries."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _cache.items() if now > exp]
    for k in expired:
        del _cache[k]
