"""Tindahan FastAPI application.

Serves one in-memory storefront per process. Route handlers are async and
run on the event loop thread, so storefront operations never interleave.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# pyproject.toml [tool.protean] sets event_processing = "sync", so projectors
# fire when each unit of work commits.
from identity.domain import identity
from inventory.domain import inventory
from ordering.domain import ordering

identity.init()
inventory.init()
ordering.init()

from storefront.application import create_app  # noqa: E402

app = create_app()
