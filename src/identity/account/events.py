"""Domain events for the Account aggregate."""

from protean.fields import Identifier, String

from identity.domain import identity


@identity.event(part_of="Account")
class AccountRegistered:
    """A new account was created (and logged in)."""

    __version__ = 1

    account_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    name = String(sanitize=False)


@identity.event(part_of="Account")
class LoggedIn:
    __version__ = 1

    account_id = Identifier(required=True)
    email = String(required=True, max_length=254)


@identity.event(part_of="Account")
class LoggedOut:
    __version__ = 1

    account_id = Identifier(required=True)
    email = String(required=True, max_length=254)
