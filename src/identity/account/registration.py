"""Account registration: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.account.account import Account, find_account
from identity.domain import identity
from shared.errors import DuplicateAccountError


@identity.command(part_of="Account")
class RegisterAccount:
    """Create a new account; the password arrives already hashed."""

    email = String(required=True, max_length=254)
    name = String(max_length=255, sanitize=False)
    address = String(max_length=500, sanitize=False)
    password_salt = String(required=True, max_length=64)
    password_hash = String(required=True, max_length=128)


@identity.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        if find_account(command.email) is not None:
            raise DuplicateAccountError({"email": ["Email already registered"]})

        account = Account.register(
            email=command.email,
            name=command.name or "",
            address=command.address or "",
            password_salt=command.password_salt,
            password_hash=command.password_hash,
        )
        current_domain.repository_for(Account).add(account)
        return str(account.id)
