"""REST API layer for clusterreport.

Exposes:
    create_app -- FastAPI application factory.
    build_app  -- Alias for create_app (used by clusterreport.app.serve).
"""

from clusterreport.api.app import create_app

build_app = create_app

__all__ = ["build_app", "create_app"]
