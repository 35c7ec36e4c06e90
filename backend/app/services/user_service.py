"""
User directory: accounts keyed by email with case-insensitive unique usernames.
"""
import logging

from app.core.exceptions import (
    AccountNotFoundError,
    BadPasswordError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidUsernameError,
    PasswordTooShortError,
)
from app.core.security import CredentialVerifier
from app.database.document_store import DocumentStore
from app.models.document import Document
from app.models.user import Account, is_valid_username, normalize_username
from app.schemas.user import AccountSummary, ProfileUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for account operations over the shared document."""

    def __init__(
        self,
        store: DocumentStore,
        verifier: CredentialVerifier,
        min_password_length: int = 6,
    ):
        """Initialize with the document store and credential verifier."""
        self.store = store
        self.verifier = verifier
        self.min_password_length = min_password_length

    # ==================== Account lifecycle ====================

    def create(self, email: str, name: str, username: str, password: str) -> Account:
        """
        Create an account and its empty photo collection.

        Args:
            email: Account key (case-sensitive)
            name: Display name
            username: Username, stored lower-cased
            password: Plain password, stored through the verifier

        Returns:
            The created Account

        Raises:
            InvalidUsernameError: If the username is empty or malformed
            PasswordTooShortError: If the password is below the minimum length
            DuplicateEmailError: If the email is already registered
            DuplicateUsernameError: If the username is taken by any account
        """
        if not is_valid_username(username):
            raise InvalidUsernameError(username)
        self.check_password(password)
        normalized = normalize_username(username)

        with self.store.transaction() as doc:
            if email in doc.users:
                raise DuplicateEmailError(email)
            if self._username_taken(doc, normalized):
                raise DuplicateUsernameError(username)

            account = Account(
                email=email,
                name=name,
                username=normalized,
                password=self.verifier.hash_password(password),
            )
            doc.users[email] = account
            doc.photos[email] = []

        logger.info("Created account %s (username %s)", email, normalized)
        return account.model_copy()

    def delete(self, email: str) -> None:
        """
        Remove an account together with its whole photo collection.

        Raises:
            AccountNotFoundError: If no account has this email
        """
        with self.store.transaction() as doc:
            if email not in doc.users:
                raise AccountNotFoundError(email)
            del doc.users[email]
            removed = doc.photos.pop(email, [])

        logger.info("Deleted account %s and %d photos", email, len(removed))

    # ==================== Lookups ====================

    def get(self, email: str) -> Account:
        """Get an account by exact email."""
        account = self.store.snapshot().users.get(email)
        if account is None:
            raise AccountNotFoundError(email)
        return account.model_copy()

    def resolve(self, identifier: str) -> Account:
        """
        Resolve a login identifier to an account.

        An exact email match wins; otherwise usernames are compared
        case-insensitively in account insertion order.

        Raises:
            AccountNotFoundError: If nothing matches
        """
        return self._resolve(self.store.snapshot(), identifier).model_copy()

    def authenticate(self, identifier: str, password: str) -> Account:
        """
        Resolve an identifier and check the password.

        Raises:
            AccountNotFoundError: If the identifier matches no account
            BadPasswordError: If the password does not match
        """
        account = self.resolve(identifier)
        if not self.verifier.verify_password(password, account.password):
            logger.info("Failed password check for %s", account.email)
            raise BadPasswordError()
        return account

    def confirm_password(self, email: str, password: str) -> Account:
        """
        Check the password of the account with exactly this email.

        Unlike ``authenticate`` the key is never matched against usernames.

        Raises:
            AccountNotFoundError: If no account has this email
            BadPasswordError: If the password does not match
        """
        account = self.get(email)
        if not self.verifier.verify_password(password, account.password):
            logger.info("Failed password check for %s", email)
            raise BadPasswordError()
        return account

    def list_accounts(self) -> list[AccountSummary]:
        """List every account with its photo count, in insertion order."""
        doc = self.store.snapshot()
        return [
            AccountSummary(
                id=email,
                name=account.name,
                username=account.username,
                photo_count=len(doc.photos.get(email, [])),
            )
            for email, account in doc.users.items()
        ]

    # ==================== Updates ====================

    def update_profile(self, email: str, changes: ProfileUpdate) -> Account:
        """
        Apply a partial profile update.

        Only fields explicitly present in ``changes`` are touched, so an
        explicit ``profile_photo=None`` clears the photo.

        Raises:
            AccountNotFoundError: If no account has this email
            InvalidUsernameError: If a new username is malformed
            DuplicateUsernameError: If another account holds the username
        """
        fields = changes.model_fields_set
        normalized = None
        if "username" in fields:
            if not is_valid_username(changes.username):
                raise InvalidUsernameError(changes.username)
            normalized = normalize_username(changes.username)

        with self.store.transaction() as doc:
            account = doc.users.get(email)
            if account is None:
                raise AccountNotFoundError(email)

            if normalized is not None:
                if self._username_taken(doc, normalized, exclude_email=email):
                    raise DuplicateUsernameError(changes.username)
                account.username = normalized
            if "name" in fields and changes.name is not None:
                account.name = changes.name
            if "profile_photo" in fields:
                account.profile_photo = changes.profile_photo

        logger.info("Updated profile of %s (%s)", email, ", ".join(sorted(fields)) or "no fields")
        return account.model_copy()

    def set_password(self, email: str, new_password: str) -> Account:
        """
        Replace the stored password of an account.

        Raises:
            PasswordTooShortError: If the password is below the minimum length
            AccountNotFoundError: If no account has this email
        """
        self.check_password(new_password)
        with self.store.transaction() as doc:
            account = doc.users.get(email)
            if account is None:
                raise AccountNotFoundError(email)
            account.password = self.verifier.hash_password(new_password)

        logger.info("Password changed for %s", email)
        return account.model_copy()

    def check_password(self, password: str) -> None:
        """Raise PasswordTooShortError if the password is too short."""
        if len(password) < self.min_password_length:
            raise PasswordTooShortError(self.min_password_length)

    # ==================== Helpers ====================

    @staticmethod
    def _resolve(doc: Document, identifier: str) -> Account:
        account = doc.users.get(identifier)
        if account is not None:
            return account

        wanted = identifier.lower()
        for candidate in doc.users.values():
            if candidate.username and candidate.username.lower() == wanted:
                return candidate
        raise AccountNotFoundError(identifier)

    @staticmethod
    def _username_taken(doc: Document, normalized: str, exclude_email: str | None = None) -> bool:
        return any(
            account.username.lower() == normalized
            for email, account in doc.users.items()
            if email != exclude_email
        )
