from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from .config import PICKS_PER_PLAYER_OPTIONS, PLAYER_COLORS
from .models import GamePhase, GameState, Player, Settings
from .teams import TEAM_IDS, TeamId

logger = logging.getLogger(__name__)


def _field(raw: dict[str, Any], key: str, default: Any = None) -> Any:
    """Read ``key`` or its camelCase spelling used by older browser snapshots."""
    if key in raw:
        return raw[key]
    head, *rest = key.split("_")
    return raw.get(head + "".join(part.title() for part in rest), default)


def _team_or_none(value: Any) -> TeamId | None:
    if not value:
        return None
    try:
        return TeamId(value)
    except ValueError:
        return None


def serialize_player(player: Player) -> dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "color": player.color,
        "teams_owned": [team_id.value for team_id in player.teams_owned],
        "home_team_id": player.home_team_id.value if player.home_team_id else None,
        "user_id": player.user_id,
    }


def deserialize_player(raw: dict[str, Any], index: int = 0) -> Player:
    teams_owned = [team_id for team_id in (_team_or_none(v) for v in _field(raw, "teams_owned", []) or []) if team_id]
    home_team_id = _team_or_none(_field(raw, "home_team_id"))
    # Older saves never stored a home team; the first draft pick is the home team.
    if home_team_id is None and teams_owned:
        home_team_id = teams_owned[0]
    user_id = _field(raw, "user_id")
    return Player(
        id=str(raw.get("id") or f"player-{index + 1}"),
        name=str(raw.get("name") or f"Player {index + 1}"),
        color=str(raw.get("color") or PLAYER_COLORS[index % len(PLAYER_COLORS)]),
        teams_owned=teams_owned,
        home_team_id=home_team_id,
        user_id=str(user_id) if user_id else None,
    )


def serialize_settings(settings: Settings) -> dict[str, Any]:
    return {
        "picks_per_player": settings.picks_per_player,
        "use_margin_rules": settings.use_margin_rules,
        "playoff_boost": settings.playoff_boost,
        "super_bowl_sweep": settings.super_bowl_sweep,
        "lock_division_rule": settings.lock_division_rule,
    }


def deserialize_settings(raw: Any) -> Settings:
    if not isinstance(raw, dict):
        return Settings()
    try:
        picks = int(_field(raw, "picks_per_player", 1))
    except (TypeError, ValueError):
        picks = 1
    if picks not in PICKS_PER_PLAYER_OPTIONS:
        picks = max(PICKS_PER_PLAYER_OPTIONS[0], min(picks, PICKS_PER_PLAYER_OPTIONS[-1]))
    return Settings(
        picks_per_player=picks,
        use_margin_rules=bool(_field(raw, "use_margin_rules", False)),
        playoff_boost=bool(_field(raw, "playoff_boost", False)),
        super_bowl_sweep=bool(_field(raw, "super_bowl_sweep", False)),
        lock_division_rule=bool(_field(raw, "lock_division_rule", False)),
    )


def serialize_state(state: GameState) -> dict[str, Any]:
    return {
        "phase": state.phase.value,
        "players": [serialize_player(player) for player in state.players],
        "draft_order": list(state.draft_order),
        "current_pick_index": state.current_pick_index,
        "ownership": {team_id.value: state.ownership.get(team_id) for team_id in TEAM_IDS},
        "week": state.week,
        "settings": serialize_settings(state.settings),
        "log": list(state.log),
    }


def deserialize_state(raw: dict[str, Any]) -> GameState:
    raw_players = raw.get("players", [])
    players = (
        [deserialize_player(p, idx) for idx, p in enumerate(raw_players) if isinstance(p, dict)]
        if isinstance(raw_players, list)
        else []
    )
    known_ids = {player.id for player in players}

    raw_ownership = raw.get("ownership", {})
    if not isinstance(raw_ownership, dict):
        raw_ownership = {}
    ownership: dict[TeamId, str | None] = {}
    for team_id in TEAM_IDS:
        owner = raw_ownership.get(team_id.value)
        ownership[team_id] = owner if owner in known_ids else None

    try:
        phase = GamePhase(raw.get("phase", GamePhase.SETUP.value))
    except ValueError:
        phase = GamePhase.SETUP
    raw_order = _field(raw, "draft_order", [])
    if not isinstance(raw_order, list):
        raw_order = []
    draft_order = [str(pid) for pid in raw_order if pid in known_ids]
    try:
        week = max(1, int(raw.get("week", 1)))
        pick_index = max(0, int(_field(raw, "current_pick_index", 0)))
    except (TypeError, ValueError):
        week, pick_index = 1, 0
    # Removed players leave gaps in the order; keep the turn on the same drafter.
    dropped_before = sum(1 for pid in raw_order[:pick_index] if pid not in known_ids)
    pick_index -= dropped_before
    raw_log = raw.get("log", [])

    return GameState(
        phase=phase,
        players=players,
        draft_order=draft_order,
        current_pick_index=pick_index,
        ownership=ownership,
        week=week,
        settings=deserialize_settings(raw.get("settings")),
        log=[str(line) for line in raw_log] if isinstance(raw_log, list) else [],
    )


class SnapshotStore:
    SAVE_VERSION = 1

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.last_load_error: str = ""

    def load(self) -> GameState | None:
        self.last_load_error = ""
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if isinstance(raw, dict):
                version = int(raw.get("save_version", 1) or 1)
                if version > self.SAVE_VERSION:
                    self.last_load_error = (
                        f"Unsupported game state version {version}; app supports up to {self.SAVE_VERSION}."
                    )
                    logger.warning(self.last_load_error)
                    return None
                payload = raw.get("state", raw)
                if isinstance(payload, dict):
                    return deserialize_state(payload)
            self.last_load_error = "Game state file has invalid format; starting a new game."
        except (json.JSONDecodeError, OSError, TypeError, ValueError) as exc:
            self.last_load_error = f"Failed to load game state ({exc}); starting a new game."
        logger.warning(self.last_load_error)
        return None

    def save(self, state: GameState, *, with_backup: bool = True) -> None:
        payload = {
            "save_version": self.SAVE_VERSION,
            "state": serialize_state(state),
        }
        if with_backup and self.path.exists():
            backup = self.path.with_suffix(self.path.suffix + ".bak")
            try:
                shutil.copy2(self.path, backup)
            except OSError:
                pass
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove game state file %s", self.path, exc_info=True)
