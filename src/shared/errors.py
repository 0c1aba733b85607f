"""Error taxonomy shared by every bounded context.

Every error is a ``protean.exceptions.ValidationError``: it carries a
``messages`` dict mapping a field (or a general key such as ``cart``) to a
list of human-readable messages. Each subclass adds a stable ``code`` the
API layer uses to pick an HTTP status. Operations that raise one of these
leave the repositories unchanged.
"""

from protean.exceptions import ValidationError as ProteanValidationError


class MarketplaceError(ProteanValidationError):
    code = "marketplace_error"

    def __init__(self, messages, **kwargs):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        super().__init__(messages, **kwargs)

    def flat_messages(self) -> list[str]:
        return [message for values in self.messages.values() for message in values]


class ValidationError(MarketplaceError):
    """Malformed or missing input."""

    code = "validation_error"


class LoginRequiredError(MarketplaceError):
    """The action needs an active session."""

    code = "login_required"


class AuthenticationError(MarketplaceError):
    code = "authentication_failed"


class DuplicateAccountError(MarketplaceError):
    code = "duplicate_account"


class NotFoundError(MarketplaceError):
    """A product or cart line reference is stale or unknown."""

    code = "not_found"


class StockError(MarketplaceError):
    """Base for every stock invariant violation."""

    code = "stock_error"


class OutOfStockError(StockError):
    code = "out_of_stock"


class StockExceededError(StockError):
    code = "stock_exceeded"


class InsufficientStockError(StockError):
    code = "insufficient_stock"


class StockConflictError(StockError):
    """Checkout found at least one line its live stock cannot cover."""

    code = "stock_conflict"


class InvalidSelectionError(MarketplaceError):
    """A payment or logistics choice the product does not offer."""

    code = "invalid_selection"


class EmptyCartError(MarketplaceError):
    code = "empty_cart"
