"""
Outbound mail for password-reset codes.

Every backend exposes ``send(to_email, code, display_name)`` and returns a
delivery reference, raising SendFailureError when the message could not be
handed off.
"""
import logging
import smtplib
import uuid
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr
from typing import Optional, Protocol

from app.config import Settings
from app.core.exceptions import SendFailureError

logger = logging.getLogger(__name__)

RESET_SUBJECT = "Your Memory Box password reset code"


class Mailer(Protocol):
    def send(self, to_email: str, code: str, display_name: str) -> str:
        ...


def describe_validity(ttl_seconds: int) -> str:
    """Human wording for the code lifetime, e.g. ``2 minutes``."""
    if ttl_seconds >= 60 and ttl_seconds % 60 == 0:
        minutes = ttl_seconds // 60
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    return f"{ttl_seconds} seconds"


def render_reset_body(code: str, display_name: str, ttl_seconds: int) -> str:
    """Plain-text body of the reset email."""
    greeting = f"Hi {display_name}," if display_name else "Hi,"
    return (
        f"{greeting}\n\n"
        f"We received a request to reset the password of your Memory Box account.\n\n"
        f"Your verification code is: {code}\n\n"
        f"This code expires in {describe_validity(ttl_seconds)}. "
        f"If you did not ask for a reset you can ignore this email.\n"
    )


class LoggingMailer:
    """Development backend: writes the message to the log instead of sending it."""

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds

    def send(self, to_email: str, code: str, display_name: str) -> str:
        reference = uuid.uuid4().hex
        logger.info(
            "Reset email for %s (ref %s):\n%s",
            to_email,
            reference,
            render_reset_body(code, display_name, self.ttl_seconds),
        )
        return reference


class SmtpMailer:
    """Sends reset emails through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        ttl_seconds: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = False,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.ttl_seconds = ttl_seconds
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, to_email: str, code: str, display_name: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = RESET_SUBJECT
        message["From"] = self.sender
        message["To"] = to_email
        message["Message-ID"] = make_msgid(domain=self._sender_domain())
        message.set_content(render_reset_body(code, display_name, self.ttl_seconds))
        return message

    def _sender_domain(self) -> str:
        address = parseaddr(self.sender)[1]
        return address.rpartition("@")[2] or "localhost"

    def send(self, to_email: str, code: str, display_name: str) -> str:
        """
        Deliver the reset email.

        Returns:
            The Message-ID of the sent message

        Raises:
            SendFailureError: On any SMTP or connection error
        """
        message = self.build_message(to_email, code, display_name)
        try:
            with smtplib.SMTP(host=self.host, port=self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send reset email to %s: %s", to_email, e)
            raise SendFailureError(f"Could not send reset email: {e}") from e

        logger.info("Sent reset email to %s (%s)", to_email, message["Message-ID"])
        return message["Message-ID"]


def create_mailer(settings: Settings) -> Mailer:
    """Build the mailer selected by ``settings.mail_backend``."""
    backend = settings.mail_backend.lower()
    if backend == "log":
        return LoggingMailer(settings.reset_code_ttl_seconds)
    if backend == "smtp":
        return SmtpMailer(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            ttl_seconds=settings.reset_code_ttl_seconds,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    raise ValueError(f"Unknown mail backend: {settings.mail_backend}")
