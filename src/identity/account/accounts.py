"""Account registry: registration, login, logout and the active session.

Mirrors what the marketplace front end did with its saved user list:
registration requires the two identity documents sellers upload
(barangay clearance and a government ID), emails are unique, and a
successful registration logs the new account in.
"""

import re
import secrets
from datetime import UTC, datetime

from protean.utils.globals import current_domain
from pydantic import BaseModel

from identity.account.account import Account, find_account, hash_password, normalize_email
from identity.account.registration import RegisterAccount
from identity.domain import identity, logger
from shared.errors import AuthenticationError, ValidationError

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Session(BaseModel):
    """The logged-in account, as the rest of the marketplace sees it."""

    model_config = {"frozen": True}

    account_id: str
    email: str
    name: str = ""
    address: str = ""
    started_at: datetime


class AccountRegistry:
    def __init__(self):
        self._session: Session | None = None

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    def register(self, name, address, email, password, documents_provided=True) -> Account:
        email = normalize_email(email)
        password = (password or "").strip()

        errors = {}
        if not documents_provided:
            errors["documents"] = ["Barangay clearance and government ID are required"]
        if not email:
            errors["email"] = ["Email is required"]
        elif not _EMAIL_PATTERN.match(email):
            errors["email"] = ["Email is not valid"]
        if not password:
            errors["password"] = ["Password is required"]
        if errors:
            raise ValidationError(errors)

        salt = secrets.token_hex(16)
        with identity.domain_context():
            account_id = current_domain.process(
                RegisterAccount(
                    email=email,
                    name=(name or "").strip(),
                    address=(address or "").strip(),
                    password_salt=salt,
                    password_hash=hash_password(password, salt),
                ),
                asynchronous=False,
            )
            account = current_domain.repository_for(Account).get(account_id)

        self._session = self._session_for(account)
        logger.info("account_registered", email=email)
        return account

    # -------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------
    def login(self, email, password) -> Session:
        email = normalize_email(email)
        with identity.domain_context():
            account = find_account(email)
            if account is None or not account.check_password((password or "").strip()):
                logger.info("login_rejected", email=email)
                raise AuthenticationError({"credentials": ["Invalid email or password"]})

            account.record_login()
            current_domain.repository_for(Account).add(account)

        self._session = self._session_for(account)
        logger.info("logged_in", email=email)
        return self._session

    def logout(self) -> None:
        if self._session is None:
            return
        session, self._session = self._session, None

        with identity.domain_context():
            repo = current_domain.repository_for(Account)
            account = repo.get_or_none(session.account_id)
            if account is not None:
                account.record_logout()
                repo.add(account)

        logger.info("logged_out", email=session.email)

    def get_active_session(self) -> Session | None:
        return self._session

    def get(self, email) -> Account | None:
        with identity.domain_context():
            return find_account(email)

    @staticmethod
    def _session_for(account: Account) -> Session:
        return Session(
            account_id=str(account.id),
            email=account.email,
            name=account.name or "",
            address=account.address or "",
            started_at=datetime.now(UTC),
        )
