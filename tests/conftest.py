"""
Global test fixtures for the Memory Box backend.

This module provides shared fixtures for all tests including:
- Temporary data files and settings
- A controllable clock for reset code expiry
- Mailers that record or fail deliveries
- Test account data
"""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Test Doubles
# =============================================================================

class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 10, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingMailer:
    """Mailer that keeps every message instead of sending it."""

    def __init__(self):
        self.sent: list[dict] = []

    def send(self, to_email: str, code: str, display_name: str) -> str:
        reference = f"ref-{len(self.sent) + 1}"
        self.sent.append({
            "to": to_email,
            "code": code,
            "name": display_name,
            "reference": reference,
        })
        return reference

    def last_code_for(self, email: str) -> str:
        for message in reversed(self.sent):
            if message["to"] == email:
                return message["code"]
        raise AssertionError(f"No mail sent to {email}")


class FailingMailer:
    """Mailer whose every delivery fails."""

    def __init__(self):
        self.attempts = 0

    def send(self, to_email: str, code: str, display_name: str) -> str:
        from app.core.exceptions import SendFailureError

        self.attempts += 1
        raise SendFailureError("SMTP relay refused the message")


# =============================================================================
# File and Settings Fixtures
# =============================================================================

@pytest.fixture
def data_file(tmp_path) -> Path:
    """Path of a not-yet-existing data file."""
    return tmp_path / "data" / "data.json"


@pytest.fixture
def read_data_file(data_file):
    """Helper returning the parsed content of the data file."""
    def _read() -> dict:
        return json.loads(data_file.read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def settings(data_file):
    """Settings pointing at the temporary data file, ignoring any .env."""
    from app.config import Settings

    return Settings(
        _env_file=None,
        data_file=str(data_file),
        reset_code_ttl_seconds=120,
        reset_store_backend="memory",
        mail_backend="log",
        password_scheme="plaintext",
        min_password_length=6,
        log_level="WARNING",
    )


# =============================================================================
# Clock and Mailer Fixtures
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def failing_mailer() -> FailingMailer:
    return FailingMailer()


# =============================================================================
# Account Fixtures
# =============================================================================

@pytest.fixture
def bob_data() -> dict:
    """Signup data for the reference account."""
    return {
        "email": "bob@example.com",
        "name": "Bob",
        "username": "bob_1",
        "password": "hunter22",
    }


@pytest.fixture
def alice_data() -> dict:
    return {
        "email": "alice@example.com",
        "name": "Alice",
        "username": "Alice",
        "password": "wonderland",
    }


@pytest.fixture
def photo_data() -> dict:
    """A photo payload as sent by the client."""
    return {
        "imageData": "data:image/png;base64,iVBORw0KGgo=",
        "caption": "hi",
        "angle": 42.5,
        "radius": 180.0,
    }
