# registration/routes/__init__.py
"""Router registry.

Single source of truth for FastAPI route inclusion.

Guidelines:
- Keep this list deterministic and explicit.
- Each router must be mounted exactly once (no duplicates).
"""

from __future__ import annotations

from registration.routes.diag_routes import router as diag_router
from registration.routes.teams_routes import router as teams_router

# Deterministic inclusion order:
# 1) Diagnostics
# 2) Business APIs (teams)
routers = [
    diag_router,
    teams_router,
]

__all__ = ["routers"]
