from __future__ import annotations

import logging
import os
import random
from pathlib import Path
from threading import Lock
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import DEFAULT_STATE_FILENAME, STATE_PATH_ENV
from .conquest import apply_week_results, territories_of
from .draft import pick_team, start_draft
from .lobby import add_player, claim_player, new_game, remove_player, rename_player, set_week, update_settings
from .models import GameState, Settings
from .persistence import SnapshotStore, serialize_state
from .results import ResultFormatError
from .standings import announce_instant_win, calculate_standings, check_instant_win, determine_winner
from .teams import TEAMS

logger = logging.getLogger(__name__)


class PlayerCreate(BaseModel):
    name: str | None = None


class PlayerRename(BaseModel):
    name: str


class PlayerClaim(BaseModel):
    user_id: str


class SettingsSelection(BaseModel):
    picks_per_player: int = 1
    use_margin_rules: bool = False
    playoff_boost: bool = False
    super_bowl_sweep: bool = False
    lock_division_rule: bool = False


class DraftStart(BaseModel):
    seed: int | None = None


class DraftPick(BaseModel):
    team_id: str
    player_id: str | None = None


class ResultsSubmission(BaseModel):
    csv: str


class WeekSelection(BaseModel):
    week: int


def default_state_path() -> Path:
    override = os.environ.get(STATE_PATH_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[2] / DEFAULT_STATE_FILENAME


class ConquestService:
    """Owns the single current game state; every mutation goes through here."""

    def __init__(self, state_path: str | Path | None = None, rng: random.Random | None = None) -> None:
        self.store = SnapshotStore(state_path or default_state_path())
        self._rng = rng or random.Random()
        self._lock = Lock()
        self.state: GameState = self.store.load() or new_game()

    @property
    def last_load_error(self) -> str:
        return self.store.last_load_error

    def _commit(self, next_state: GameState) -> dict[str, Any]:
        self.state = next_state
        self.store.save(next_state)
        return self.snapshot()

    def _require_player(self, player_id: str) -> None:
        if self.state.player(player_id) is None:
            raise HTTPException(status_code=404, detail="Player not found")

    def snapshot(self) -> dict[str, Any]:
        return serialize_state(self.state)

    def teams(self) -> list[dict[str, Any]]:
        return [
            {
                "id": team.id.value,
                "name": team.name,
                "city": team.city,
                "conference": team.conference,
                "division": team.division,
                "color": team.color,
                "owner": self.state.ownership.get(team.id),
            }
            for team in TEAMS
        ]

    def standings(self) -> dict[str, Any]:
        rows = [
            {
                "player_id": row.player.id,
                "name": row.player.name,
                "color": row.player.color,
                "territories": row.territories,
                "percentage": round(row.percentage, 2),
                "teams": [team_id.value for team_id in territories_of(self.state, row.player.id)],
            }
            for row in calculate_standings(self.state)
        ]
        return {
            "week": self.state.week,
            "standings": rows,
            "instant_winner": check_instant_win(self.state),
            "leaders": determine_winner(self.state),
        }

    def add_player(self, name: str | None) -> dict[str, Any]:
        return self._commit(add_player(self.state, name=name))

    def remove_player(self, player_id: str) -> dict[str, Any]:
        self._require_player(player_id)
        return self._commit(remove_player(self.state, player_id))

    def rename_player(self, player_id: str, name: str) -> dict[str, Any]:
        self._require_player(player_id)
        return self._commit(rename_player(self.state, player_id, name))

    def claim_player(self, player_id: str, user_id: str) -> dict[str, Any]:
        self._require_player(player_id)
        return self._commit(claim_player(self.state, player_id, user_id))

    def update_settings(self, payload: SettingsSelection) -> dict[str, Any]:
        try:
            settings = Settings(**payload.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return self._commit(update_settings(self.state, settings))

    def start_draft(self, seed: int | None = None) -> dict[str, Any]:
        rng = random.Random(seed) if seed is not None else self._rng
        return self._commit(start_draft(self.state, rng=rng))

    def pick_team(self, team_id: str, player_id: str | None = None) -> dict[str, Any]:
        return self._commit(pick_team(self.state, team_id, acting_player_id=player_id))

    def submit_results(self, csv_text: str) -> dict[str, Any]:
        try:
            next_state = apply_week_results(self.state, csv_text)
        except ResultFormatError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return self._commit(announce_instant_win(next_state))

    def set_week(self, week: int) -> dict[str, Any]:
        return self._commit(set_week(self.state, week))

    def reset(self) -> dict[str, Any]:
        logger.info("Resetting game state")
        self.store.clear()
        return self._commit(new_game())


def build_app(service: ConquestService) -> FastAPI:
    app = FastAPI(title="Conquest Map API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/teams")
    def teams() -> list[dict[str, Any]]:
        with service._lock:
            return service.teams()

    @app.get("/api/state")
    def state() -> dict[str, Any]:
        with service._lock:
            return service.snapshot()

    @app.get("/api/standings")
    def standings() -> dict[str, Any]:
        with service._lock:
            return service.standings()

    @app.post("/api/players")
    def create_player(payload: PlayerCreate) -> dict[str, Any]:
        with service._lock:
            return service.add_player(payload.name)

    @app.delete("/api/players/{player_id}")
    def delete_player(player_id: str) -> dict[str, Any]:
        with service._lock:
            return service.remove_player(player_id)

    @app.post("/api/players/{player_id}/name")
    def rename(player_id: str, payload: PlayerRename) -> dict[str, Any]:
        with service._lock:
            return service.rename_player(player_id, payload.name)

    @app.post("/api/players/{player_id}/claim")
    def claim(player_id: str, payload: PlayerClaim) -> dict[str, Any]:
        with service._lock:
            return service.claim_player(player_id, payload.user_id)

    @app.post("/api/settings")
    def set_settings(payload: SettingsSelection) -> dict[str, Any]:
        with service._lock:
            return service.update_settings(payload)

    @app.post("/api/draft/start")
    def draft_start(payload: DraftStart) -> dict[str, Any]:
        with service._lock:
            return service.start_draft(seed=payload.seed)

    @app.post("/api/draft/pick")
    def draft_pick(payload: DraftPick) -> dict[str, Any]:
        with service._lock:
            return service.pick_team(payload.team_id, player_id=payload.player_id)

    @app.post("/api/results")
    def results(payload: ResultsSubmission) -> dict[str, Any]:
        with service._lock:
            return service.submit_results(payload.csv)

    @app.post("/api/week")
    def week(payload: WeekSelection) -> dict[str, Any]:
        with service._lock:
            return service.set_week(payload.week)

    @app.post("/api/reset")
    def reset() -> dict[str, Any]:
        with service._lock:
            return service.reset()

    return app


app = build_app(ConquestService())
