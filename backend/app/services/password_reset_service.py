"""
Self-service password reset: find account, mail a code, verify it, reset.
"""
import logging

from app.core.exceptions import SendFailureError
from app.models.user import Account
from app.schemas.auth import ResetTicket
from app.services.mailer import Mailer
from app.services.reset_codes import ResetCodeRegistry
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Coordinates the user directory, the code registry and the mailer."""

    def __init__(self, users: UserService, registry: ResetCodeRegistry, mailer: Mailer):
        self.users = users
        self.registry = registry
        self.mailer = mailer

    def request_code(self, identifier: str) -> ResetTicket:
        """
        Find the account for an email or username and mail it a code.

        Raises:
            AccountNotFoundError: If the identifier matches no account
            SendFailureError: If the mail could not be sent
        """
        return self._issue_and_send(self.users.resolve(identifier))

    def resend_code(self, email: str) -> ResetTicket:
        """Replace the code of an account and mail the new one."""
        return self._issue_and_send(self.users.get(email))

    def verify_code(self, email: str, code: str) -> None:
        self.registry.verify(email, code)

    def reset_password(self, email: str, code: str, new_password: str) -> Account:
        """
        Set a new password using a verified code.

        The code is only used up once the new password has been stored.

        Raises:
            PasswordTooShortError: If the new password is too short
            ResetEntryNotFoundError, CodeExpiredError, CodeMismatchError,
            CodeNotVerifiedError: On reset code state violations
            AccountNotFoundError: If the account disappeared meanwhile
        """
        self.users.check_password(new_password)
        updated: list[Account] = []

        def store_password() -> None:
            updated.append(self.users.set_password(email, new_password))

        self.registry.consume(email, code, apply=store_password)
        logger.info("Password reset completed for %s", email)
        return updated[0]

    def _issue_and_send(self, account: Account) -> ResetTicket:
        code = self.registry.issue(account.email)
        try:
            reference = self.mailer.send(account.email, code, account.name or account.username)
        except SendFailureError:
            self.registry.discard(account.email)
            logger.warning("Discarded reset code for %s after send failure", account.email)
            raise

        return ResetTicket(
            email=account.email,
            name=account.name,
            delivery_reference=reference,
            expires_in_seconds=self.registry.ttl_seconds,
        )
