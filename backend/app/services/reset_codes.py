"""
Password-reset code registry.

Per email the registry moves through::

    Absent --issue--> Pending --verify--> Verified --consume--> Absent

``issue`` always overwrites, and an expired entry is treated as Absent on
every read (and deleted when seen). Entries live in a pluggable backend; the
registry serializes all access with its own lock, independent of the
document store.
"""
import hmac
import logging
import math
import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional, Protocol

from redis import Redis, RedisError

from app.core.exceptions import (
    CodeExpiredError,
    CodeMismatchError,
    CodeNotVerifiedError,
    ResetEntryNotFoundError,
    StoreUnavailableError,
)
from app.models.reset_entry import ResetEntry

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ==================== Backends ====================

class ResetCodeStore(Protocol):
    """Key-value storage for reset entries."""

    def get(self, email: str) -> Optional[ResetEntry]:
        ...

    def put(self, email: str, entry: ResetEntry, now: datetime) -> None:
        ...

    def delete(self, email: str) -> None:
        ...

    def emails(self) -> Iterable[str]:
        ...


class InMemoryResetCodeStore:
    """Process-local storage; pending resets do not survive a restart."""

    def __init__(self):
        self._entries: dict[str, ResetEntry] = {}

    def get(self, email: str) -> Optional[ResetEntry]:
        entry = self._entries.get(email)
        return entry.model_copy() if entry is not None else None

    def put(self, email: str, entry: ResetEntry, now: datetime) -> None:
        self._entries[email] = entry.model_copy()

    def delete(self, email: str) -> None:
        self._entries.pop(email, None)

    def emails(self) -> Iterable[str]:
        return list(self._entries)


class RedisResetCodeStore:
    """
    Redis storage for reset entries.

    Key pattern: ``reset_code:{email}`` holding the entry as JSON, with a
    Redis TTL matching the entry expiry so abandoned codes are purged by
    Redis itself.
    """

    KEY_PREFIX = "reset_code:"

    def __init__(self, client: Redis):
        self.client = client

    def _key(self, email: str) -> str:
        return f"{self.KEY_PREFIX}{email}"

    def get(self, email: str) -> Optional[ResetEntry]:
        try:
            raw = self.client.get(self._key(email))
        except RedisError as e:
            raise StoreUnavailableError(f"Reset code store unavailable: {e}") from e
        return ResetEntry.model_validate_json(raw) if raw else None

    def put(self, email: str, entry: ResetEntry, now: datetime) -> None:
        ttl = max(1, math.ceil((entry.expires_at - now).total_seconds()))
        try:
            self.client.set(self._key(email), entry.model_dump_json(), ex=ttl)
        except RedisError as e:
            raise StoreUnavailableError(f"Reset code store unavailable: {e}") from e

    def delete(self, email: str) -> None:
        try:
            self.client.delete(self._key(email))
        except RedisError as e:
            raise StoreUnavailableError(f"Reset code store unavailable: {e}") from e

    def emails(self) -> Iterable[str]:
        try:
            keys = list(self.client.scan_iter(match=f"{self.KEY_PREFIX}*"))
        except RedisError as e:
            raise StoreUnavailableError(f"Reset code store unavailable: {e}") from e
        return [key[len(self.KEY_PREFIX):] for key in keys]


# ==================== Registry ====================

class ResetCodeRegistry:
    """Lock-protected reset code state machine with a fixed TTL."""

    def __init__(
        self,
        store: Optional[ResetCodeStore] = None,
        ttl_seconds: int = 120,
        clock: Clock = utc_now,
    ):
        self._store = store if store is not None else InMemoryResetCodeStore()
        self.ttl_seconds = ttl_seconds
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()

    @staticmethod
    def generate_code() -> str:
        """Uniform random code in 100000-999999."""
        return f"{secrets.randbelow(900000) + 100000:06d}"

    def issue(self, email: str) -> str:
        """
        Issue a fresh code for ``email``, replacing any existing entry.

        Returns:
            The 6-digit code
        """
        code = self.generate_code()
        with self._lock:
            now = self._clock()
            self._store.put(email, ResetEntry(code=code, expires_at=now + self._ttl), now)
        logger.info("Issued reset code for %s (valid %ds)", email, self.ttl_seconds)
        return code

    def verify(self, email: str, code: str) -> None:
        """
        Check a code and mark the entry verified.

        Raises:
            ResetEntryNotFoundError: If no entry exists
            CodeExpiredError: If the entry expired (it is deleted)
            CodeMismatchError: If the code differs
        """
        with self._lock:
            now = self._clock()
            entry = self._live_entry(email, now)
            if not self._matches(entry, code):
                raise CodeMismatchError(email)
            entry.verified = True
            self._store.put(email, entry, now)
        logger.info("Reset code verified for %s", email)

    def consume(self, email: str, code: str, apply: Optional[Callable[[], None]] = None) -> None:
        """
        Use up a verified code.

        ``apply`` runs while the registry lock is held, before the entry is
        deleted; if it raises, the entry is kept and the error propagates.

        Raises:
            ResetEntryNotFoundError: If no entry exists
            CodeExpiredError: If the entry expired (it is deleted)
            CodeMismatchError: If the code differs
            CodeNotVerifiedError: If the code was never verified
        """
        with self._lock:
            now = self._clock()
            entry = self._live_entry(email, now)
            if not self._matches(entry, code):
                raise CodeMismatchError(email)
            if not entry.verified:
                raise CodeNotVerifiedError(email)
            if apply is not None:
                apply()
            self._store.delete(email)
        logger.info("Reset code consumed for %s", email)

    def discard(self, email: str) -> None:
        """Drop any entry for ``email``."""
        with self._lock:
            self._store.delete(email)

    def sweep(self) -> int:
        """Delete every expired entry. Returns how many were removed."""
        removed = 0
        with self._lock:
            now = self._clock()
            for email in self._store.emails():
                entry = self._store.get(email)
                if entry is not None and entry.is_expired(now):
                    self._store.delete(email)
                    removed += 1
        if removed:
            logger.debug("Swept %d expired reset codes", removed)
        return removed

    def _live_entry(self, email: str, now: datetime) -> ResetEntry:
        # Caller holds the lock
        entry = self._store.get(email)
        if entry is None:
            raise ResetEntryNotFoundError(email)
        if entry.is_expired(now):
            self._store.delete(email)
            logger.info("Reset code for %s expired", email)
            raise CodeExpiredError(email)
        return entry

    @staticmethod
    def _matches(entry: ResetEntry, code: str) -> bool:
        return hmac.compare_digest(entry.code.encode("utf-8"), str(code).strip().encode("utf-8"))
