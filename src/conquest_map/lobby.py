"""Setup-phase operations: roster of players, rule settings and game resets."""

from __future__ import annotations

import logging
from dataclasses import replace
from uuid import uuid4

from .config import MAX_PLAYERS, PLAYER_COLORS
from .models import GamePhase, GameState, Player, Settings

logger = logging.getLogger(__name__)


def new_game(settings: Settings | None = None) -> GameState:
    return GameState(settings=replace(settings) if settings is not None else Settings())


def _in_setup(state: GameState, action: str) -> bool:
    if state.phase != GamePhase.SETUP:
        logger.debug("Ignoring %s outside setup phase (phase=%s)", action, state.phase.value)
        return False
    return True


def add_player(state: GameState, name: str | None = None, player_id: str | None = None) -> GameState:
    if not _in_setup(state, "add_player"):
        return state
    if len(state.players) >= MAX_PLAYERS:
        logger.debug("Ignoring add_player: roster already has %d players", MAX_PLAYERS)
        return state
    new_id = player_id or f"player-{uuid4().hex}"
    if state.player(new_id) is not None:
        logger.debug("Ignoring add_player: id %s already taken", new_id)
        return state
    index = len(state.players)
    clean_name = (name or "").strip() or f"Player {index + 1}"
    next_state = state.copy()
    next_state.players.append(
        Player(id=new_id, name=clean_name, color=PLAYER_COLORS[index % len(PLAYER_COLORS)])
    )
    return next_state


def add_players(state: GameState, names: list[str], settings: Settings | None = None) -> GameState:
    next_state = state
    for name in names:
        next_state = add_player(next_state, name=name)
    if settings is not None:
        next_state = update_settings(next_state, settings)
    return next_state


def remove_player(state: GameState, player_id: str) -> GameState:
    if not _in_setup(state, "remove_player") or state.player(player_id) is None:
        return state
    next_state = state.copy()
    next_state.players = [p for p in next_state.players if p.id != player_id]
    return next_state


def rename_player(state: GameState, player_id: str, name: str) -> GameState:
    clean_name = name.strip()
    if not clean_name or not _in_setup(state, "rename_player"):
        return state
    next_state = state.copy()
    player = next_state.player(player_id)
    if player is None:
        return state
    player.name = clean_name
    return next_state


def claim_player(state: GameState, player_id: str, user_id: str) -> GameState:
    """Bind a player slot to an external identity; the slot takes the user's name."""
    clean_user = user_id.strip()
    if not clean_user:
        return state
    next_state = state.copy()
    player = next_state.player(player_id)
    if player is None:
        return state
    player.user_id = clean_user
    player.name = clean_user
    return next_state


def update_settings(state: GameState, settings: Settings) -> GameState:
    if not _in_setup(state, "update_settings"):
        return state
    next_state = state.copy()
    next_state.settings = replace(settings)
    return next_state


def set_week(state: GameState, week: int) -> GameState:
    next_state = state.copy()
    next_state.week = max(1, int(week))
    return next_state
