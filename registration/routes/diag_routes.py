# registration/routes/diag_routes.py
import logging

from fastapi import APIRouter, Depends

from registration.config import config_diag_safe
from registration.data_client.team_store import TeamStore
from registration.routes.teams_routes import get_team_store

logger = logging.getLogger("team-registration.diag")
router = APIRouter(tags=["diag"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/api/diag/config")
def diag_config():
    return config_diag_safe()


@router.get("/api/diag/store")
async def diag_store(store: TeamStore = Depends(get_team_store)):
    teams = await store.read_all()
    return {
        "path": str(store.path),
        "exists": store.path.exists(),
        "team_count": len(teams),
    }
