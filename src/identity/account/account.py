"""Account aggregate: one registered shopper/seller and their password hash."""

import hashlib
import hmac
from datetime import UTC, datetime

from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from identity.account.events import AccountRegistered, LoggedIn, LoggedOut
from identity.domain import identity

_HASH_ITERATIONS = 120_000


def hash_password(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), _HASH_ITERATIONS).hex()


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


@identity.aggregate
class Account:
    email = String(required=True, max_length=254)
    name = String(max_length=255, sanitize=False)
    address = String(max_length=500, sanitize=False)
    password_salt = String(required=True, max_length=64)
    password_hash = String(required=True, max_length=128)
    registered_at = DateTime()
    last_login_at = DateTime()

    @classmethod
    def register(cls, email, name, address, password_salt, password_hash):
        now = datetime.now(UTC)
        account = cls(
            email=email,
            name=name,
            address=address,
            password_salt=password_salt,
            password_hash=password_hash,
            registered_at=now,
            last_login_at=now,
        )
        account.raise_(AccountRegistered(account_id=str(account.id), email=email, name=name))
        return account

    def check_password(self, password: str) -> bool:
        candidate = hash_password(password, self.password_salt)
        return hmac.compare_digest(candidate, self.password_hash)

    def record_login(self) -> None:
        self.last_login_at = datetime.now(UTC)
        self.raise_(LoggedIn(account_id=str(self.id), email=self.email))

    def record_logout(self) -> None:
        self.raise_(LoggedOut(account_id=str(self.id), email=self.email))


def find_account(email) -> Account | None:
    """Look an account up by email in the active identity context."""
    accounts = current_domain.repository_for(Account).query.filter(email=normalize_email(email)).all().items
    return accounts[0] if accounts else None
