# registration/data_client/team_store.py
"""
JSON-file team store.

Responsibilities:
- Read the whole team collection from a single JSON file (array of records)
- Replace the whole collection atomically
- Serialize write cycles (read -> compute -> write) so concurrent requests
  cannot overwrite each other's changes

IMPORTANT:
- Every mutation MUST go through `write_cycle()`; `write_all()` alone is a
  blind replace and is only safe when the caller does not depend on what was
  read before.
- The lock is owned by the store instance: one instance per process, one
  process per data file.
- Records are not validated here; callers own the record shape.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

from registration.errors import TeamStoreError
from registration.metrics import STORE_LOCK_WAIT, STORE_WRITE_LATENCY
from registration.utils import load_json_file, save_json_file

logger = logging.getLogger("team-registration.store")


class WriteCycle:
    """
    Snapshot handed out by `TeamStore.write_cycle()`.

    `teams` is the collection as read under the lock. Call `replace()` with the
    next collection; nothing is written if it is never called.
    """

    def __init__(self, teams: List[Dict[str, Any]]):
        self.teams = teams
        self.pending: Optional[List[Dict[str, Any]]] = None

    def replace(self, teams: List[Dict[str, Any]]) -> None:
        self.pending = list(teams)


class TeamStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # File access (runs in a worker thread)
    # ------------------------------------------------------------------
    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            raw = load_json_file(self.path)
        except (OSError, ValueError) as exc:
            raise TeamStoreError(f"Cannot read team collection {self.path}: {exc}") from exc

        if not isinstance(raw, list):
            raise TeamStoreError(
                f"Team collection {self.path} must contain a JSON array, got {type(raw).__name__}"
            )
        return raw

    def _save(self, teams: List[Dict[str, Any]]) -> None:
        try:
            with STORE_WRITE_LATENCY.time():
                save_json_file(self.path, teams)
        except (OSError, TypeError, ValueError) as exc:
            raise TeamStoreError(f"Cannot write team collection {self.path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def read_all(self) -> List[Dict[str, Any]]:
        """
        Return the full collection (empty if the file does not exist yet).

        No lock: writes replace the file atomically, so a read sees the
        collection either before or after any write cycle.
        """
        return await asyncio.to_thread(self._load)

    async def write_all(self, teams: List[Dict[str, Any]]) -> None:
        """Replace the whole collection."""
        async with self._exclusive():
            await asyncio.to_thread(self._save, list(teams))

    @asynccontextmanager
    async def write_cycle(self) -> AsyncIterator[WriteCycle]:
        """
        Exclusive read-modify-write transaction.

            async with store.write_cycle() as cycle:
                cycle.replace([new_team, *cycle.teams])

        The write happens on exit, only if `replace()` was called and the
        block did not raise.
        """
        async with self._exclusive():
            cycle = WriteCycle(await asyncio.to_thread(self._load))
            yield cycle
            if cycle.pending is not None:
                await asyncio.to_thread(self._save, cycle.pending)
                logger.debug(
                    f"Wrote {len(cycle.pending)} teams to {self.path} "
                    f"(was {len(cycle.teams)})"
                )

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        started = time.perf_counter()
        async with self._lock:
            STORE_LOCK_WAIT.observe(time.perf_counter() - started)
            yield


def make_team_store(path: Path) -> TeamStore:
    return TeamStore(path)
