# registration/routes/teams_routes.py
"""Team registration endpoints.

Collection: GET/POST /teams, DELETE /teams?id=<uuid>
Single team: GET/PATCH/DELETE /teams/{team_id}

Every mutation is one write cycle against the TeamStore (read the whole
collection, compute the next one, write it back) and runs under the store's
write lock. Errors are raised as TeamRegistrationError subclasses and turned
into {"error": message} responses by the app's exception handlers.
"""

from __future__ import annotations

import datetime as _dt
import logging
import re
import uuid
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status

from registration.data_client.team_store import TeamStore
from registration.errors import (
    MalformedBodyError,
    MalformedIdentifierError,
    MissingIdentifierError,
    TeamNotFoundError,
    UnsupportedMediaTypeError,
)
from registration.metrics import TEAM_OPERATIONS
from registration.models import (
    NonSrmTeamSubmission,
    SrmTeamSubmission,
    submission_payload,
    to_team_summary,
    validate_team_submission,
)

logger = logging.getLogger("team-registration.teams")

router = APIRouter(prefix="/teams", tags=["teams"])

# 8-4-4-4-12 hex, version 1..5, RFC 4122 variant
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def get_team_store(request: Request) -> TeamStore:
    return request.app.state.team_store


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _format_ts(value: _dt.datetime) -> str:
    return value.astimezone(_dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_ts(value: Any) -> Optional[_dt.datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = _dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_dt.timezone.utc)
    return parsed


def _utc_now() -> _dt.datetime:
    now = _dt.datetime.now(_dt.timezone.utc)
    # Stored timestamps keep millisecond precision
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _next_updated_at(previous: Any) -> str:
    """Current time, or previous + 1ms when the clock has not moved past it."""
    now = _utc_now()
    prev = _parse_ts(previous)
    if prev is not None and now <= prev:
        now = prev + _dt.timedelta(milliseconds=1)
    return _format_ts(now)


def _check_team_id(team_id: str) -> str:
    if not _UUID_RE.match(team_id):
        raise MalformedIdentifierError()
    return team_id


def _is_json_request(request: Request) -> bool:
    return "application/json" in request.headers.get("content-type", "").lower()


async def _read_submission(request: Request) -> Union[SrmTeamSubmission, NonSrmTeamSubmission]:
    """Content-type check -> JSON decoding -> schema validation."""
    if not _is_json_request(request):
        raise UnsupportedMediaTypeError()

    try:
        body = await request.json()
    except ValueError:
        raise MalformedBodyError()
    if body is None:
        raise MalformedBodyError()

    return validate_team_submission(body)


def _summaries(teams: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [to_team_summary(t) for t in teams]


def _find_index(teams: List[Dict[str, Any]], team_id: str) -> Optional[int]:
    for idx, team in enumerate(teams):
        if team.get("id") == team_id:
            return idx
    return None


async def _remove_team(store: TeamStore, team_id: str) -> List[Dict[str, Any]]:
    """Delete one team in a single write cycle; no write when it is absent."""
    async with store.write_cycle() as cycle:
        remaining = [t for t in cycle.teams if t.get("id") != team_id]
        if len(remaining) == len(cycle.teams):
            raise TeamNotFoundError()
        cycle.replace(remaining)

    logger.info(f"Deleted team {team_id} ({len(remaining)} remaining)")
    return remaining


# ----------------------------------------------------------------------
# Collection endpoints
# ----------------------------------------------------------------------
@router.get("")
async def list_teams(store: TeamStore = Depends(get_team_store)):
    teams = await store.read_all()
    TEAM_OPERATIONS.labels(operation="list_teams", outcome="ok").inc()
    return {"teams": _summaries(teams)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_team(request: Request, store: TeamStore = Depends(get_team_store)):
    submission = await _read_submission(request)

    now = _format_ts(_utc_now())
    team = {
        "id": str(uuid.uuid4()),
        "createdAt": now,
        "updatedAt": now,
        **submission_payload(submission),
    }

    async with store.write_cycle() as cycle:
        next_teams = [team, *cycle.teams]
        cycle.replace(next_teams)

    logger.info(f"Registered {team['teamType']} team '{team['teamName']}' as {team['id']}")
    TEAM_OPERATIONS.labels(operation="create_team", outcome="ok").inc()
    return {"team": team, "teams": _summaries(next_teams)}


@router.delete("")
async def delete_team_by_query(
    team_id: Optional[str] = Query(None, alias="id", description="Team id (UUID)"),
    store: TeamStore = Depends(get_team_store),
):
    team_id = (team_id or "").strip()
    if not team_id:
        raise MissingIdentifierError()
    _check_team_id(team_id)

    remaining = await _remove_team(store, team_id)
    TEAM_OPERATIONS.labels(operation="delete_team_by_query", outcome="ok").inc()
    return {"teams": _summaries(remaining)}


# ----------------------------------------------------------------------
# Single team endpoints
# ----------------------------------------------------------------------
@router.get("/{team_id}")
async def get_team(team_id: str, store: TeamStore = Depends(get_team_store)):
    _check_team_id(team_id)

    teams = await store.read_all()
    idx = _find_index(teams, team_id)
    if idx is None:
        raise TeamNotFoundError()

    TEAM_OPERATIONS.labels(operation="get_team", outcome="ok").inc()
    return {"team": teams[idx]}


@router.patch("/{team_id}")
async def update_team(
    team_id: str,
    request: Request,
    store: TeamStore = Depends(get_team_store),
):
    """
    Replace the team's submitted fields with the validated body.

    Only `id` and `createdAt` survive from the stored record; `updatedAt`
    always moves forward.
    """
    _check_team_id(team_id)
    submission = await _read_submission(request)

    async with store.write_cycle() as cycle:
        idx = _find_index(cycle.teams, team_id)
        if idx is None:
            raise TeamNotFoundError()

        previous = cycle.teams[idx]
        updated = {
            **submission_payload(submission),
            "id": previous["id"],
            "createdAt": previous.get("createdAt"),
            "updatedAt": _next_updated_at(previous.get("updatedAt")),
        }
        next_teams = list(cycle.teams)
        next_teams[idx] = updated
        cycle.replace(next_teams)

    logger.info(f"Updated team {team_id}")
    TEAM_OPERATIONS.labels(operation="update_team", outcome="ok").inc()
    return {"team": updated}


@router.delete("/{team_id}")
async def delete_team(team_id: str, store: TeamStore = Depends(get_team_store)):
    _check_team_id(team_id)

    remaining = await _remove_team(store, team_id)
    TEAM_OPERATIONS.labels(operation="delete_team", outcome="ok").inc()
    return {"teams": remaining}
