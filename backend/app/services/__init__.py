"""
Service layer for business logic.
"""
from app.services.user_service import UserService
from app.services.photo_service import PhotoService
from app.services.reset_codes import (
    ResetCodeRegistry,
    InMemoryResetCodeStore,
    RedisResetCodeStore,
)
from app.services.mailer import LoggingMailer, SmtpMailer, create_mailer
from app.services.password_reset_service import PasswordResetService

__all__ = [
    "UserService",
    "PhotoService",
    "ResetCodeRegistry",
    "InMemoryResetCodeStore",
    "RedisResetCodeStore",
    "LoggingMailer",
    "SmtpMailer",
    "create_mailer",
    "PasswordResetService",
]
