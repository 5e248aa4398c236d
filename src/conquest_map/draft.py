from __future__ import annotations

import logging
import random
from typing import Iterable

from .config import MIN_PLAYERS, PICKS_PER_PLAYER_OPTIONS
from .models import GamePhase, GameState, Player
from .teams import TEAM_MAP, TeamId, Territory, empty_ownership, shares_division

logger = logging.getLogger(__name__)


def build_draft_order(player_ids: Iterable[str], picks_per_player: int) -> list[str]:
    if picks_per_player not in PICKS_PER_PLAYER_OPTIONS:
        raise ValueError(f"picks_per_player must be one of {PICKS_PER_PLAYER_OPTIONS} (got {picks_per_player}).")
    ids = list(player_ids)
    order: list[str] = []
    for round_idx in range(picks_per_player):
        order.extend(reversed(ids) if round_idx % 2 == 1 else ids)
    return order


def start_draft(state: GameState, rng: random.Random | None = None) -> GameState:
    if state.phase != GamePhase.SETUP:
        logger.debug("Ignoring start_draft outside setup phase (phase=%s)", state.phase.value)
        return state
    if len(state.players) < MIN_PLAYERS:
        logger.debug("Ignoring start_draft: %d players, need %d", len(state.players), MIN_PLAYERS)
        return state

    shuffled = [player.id for player in state.players]
    (rng or random.Random()).shuffle(shuffled)

    next_state = state.copy()
    next_state.draft_order = build_draft_order(shuffled, next_state.settings.picks_per_player)
    next_state.current_pick_index = 0
    next_state.ownership = empty_ownership()
    next_state.phase = GamePhase.DRAFT
    next_state.log = ["Draft started!"]
    logger.info("Draft started with %d players, %d picks", len(shuffled), len(next_state.draft_order))
    return next_state


def find_division_conflict(player: Player, team: Territory) -> TeamId | None:
    for owned_id in player.teams_owned:
        if shares_division(owned_id, team.id):
            return owned_id
    return None


def _claim_first_pick(player: Player, team: Territory) -> None:
    # A player's first successful pick fixes their colour and home territory for good.
    if player.has_drafted or player.home_team_id is not None:
        return
    player.color = team.color
    player.home_team_id = team.id


def pick_team(state: GameState, team_id: TeamId | str, acting_player_id: str | None = None) -> GameState:
    """Rejected picks return ``state`` itself; a division-lock refusal only appends to the log."""
    if state.phase != GamePhase.DRAFT:
        logger.debug("Ignoring pick outside draft phase (phase=%s)", state.phase.value)
        return state
    try:
        team = TEAM_MAP[TeamId(team_id)]
    except ValueError:
        logger.debug("Ignoring pick of unknown team %r", team_id)
        return state
    if state.ownership.get(team.id) is not None:
        logger.debug("Ignoring pick of %s: already owned by %s", team.id, state.ownership[team.id])
        return state

    drafter_id = state.current_drafter_id()
    if drafter_id is None or state.player(drafter_id) is None:
        logger.debug("Ignoring pick: no drafter at index %d", state.current_pick_index)
        return state
    if acting_player_id is not None and acting_player_id != drafter_id:
        logger.debug("Ignoring pick by %s: it is %s's turn", acting_player_id, drafter_id)
        return state

    next_state = state.copy()
    player = next_state.player(drafter_id)
    if player is None:
        return state

    if next_state.settings.lock_division_rule:
        conflict_id = find_division_conflict(player, team)
        if conflict_id is not None:
            conflict = TEAM_MAP[conflict_id]
            next_state.log.append(
                f"{player.name} cannot draft {team.full_name} (same division as {conflict.full_name})."
            )
            return next_state

    _claim_first_pick(player, team)
    player.teams_owned.append(team.id)
    next_state.ownership[team.id] = player.id
    next_state.current_pick_index += 1
    next_state.log.append(f"{player.name} drafted {team.id}")

    if next_state.current_pick_index >= next_state.total_picks:
        next_state.phase = GamePhase.SEASON
        logger.info("Draft complete after %d picks; season begins at week %d", next_state.current_pick_index, next_state.week)
    return next_state
