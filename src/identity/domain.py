"""Identity bounded context: mock shopper/seller accounts and the active session.

There is no real authentication here: accounts live in memory and the
registry remembers which one is logged in. The cart and checkout consume
only ``get_active_session()``.
"""

import structlog
from protean.domain import Domain

identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
