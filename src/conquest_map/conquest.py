from __future__ import annotations

import logging

from .config import MARGIN_BONUS_THRESHOLD
from .models import GameState, MatchResult, Player
from .results import parse_results
from .teams import TEAM_IDS, TeamId

logger = logging.getLogger(__name__)


def territories_of(state: GameState, player_id: str | None) -> list[TeamId]:
    if not player_id:
        return []
    return [team_id for team_id in TEAM_IDS if state.ownership.get(team_id) == player_id]


def owner_of(state: GameState, team_id: TeamId) -> Player | None:
    return state.player(state.ownership.get(team_id))


def is_home_protected(state: GameState, row: MatchResult, team_id: TeamId, owner_id: str | None) -> bool:
    if row.is_playoff or row.is_super_bowl:
        return False
    owner = state.player(owner_id)
    if owner is None:
        return False
    return owner.home_team_id is not None and owner.home_team_id == team_id


def _extra_captures(state: GameState, row: MatchResult) -> int:
    extra = 0
    if state.settings.use_margin_rules and row.margin is not None and row.margin >= MARGIN_BONUS_THRESHOLD:
        extra += 1
    if state.settings.playoff_boost and row.is_playoff:
        extra += 1
    return extra


def apply_row(state: GameState, row: MatchResult) -> GameState:
    """Bonus and sweep both work from the owners read before this row's transfer."""
    new_state = state.copy()
    ownership = new_state.ownership
    log = new_state.log

    winner_owner = ownership.get(row.winner)
    loser_owner = ownership.get(row.loser)

    if winner_owner and loser_owner:
        if is_home_protected(new_state, row, row.loser, loser_owner):
            log.append(
                f"{row.winner} beat {row.loser}, but {row.loser} is a home team "
                "and cannot be captured outside the playoffs."
            )
        else:
            ownership[row.loser] = winner_owner
            log.append(f"{row.winner} beat {row.loser} (captured 1 territory)")
    elif loser_owner:
        owner_name = new_state.player_name(loser_owner)
        if is_home_protected(new_state, row, row.loser, loser_owner):
            log.append(f"{row.winner} (neutral) beat {row.loser}, but home team {row.loser} stays with {owner_name}.")
        else:
            ownership[row.winner] = loser_owner
            log.append(f"{row.winner} (neutral) beat {row.loser}, maintaining {owner_name}'s control")

    extra = _extra_captures(new_state, row)
    if extra > 0 and winner_owner and loser_owner:
        captured = 0
        for territory in territories_of(new_state, loser_owner):
            if captured >= extra:
                break
            if territory == row.loser or is_home_protected(new_state, row, territory, loser_owner):
                continue
            ownership[territory] = winner_owner
            captured += 1
        if captured > 0:
            log.append(f"  + {captured} extra capture(s) from margin/playoff rules")

    if new_state.settings.super_bowl_sweep and row.is_super_bowl and winner_owner:
        swept = territories_of(new_state, loser_owner)
        for territory in swept:
            ownership[territory] = winner_owner
        log.append(f"SUPER BOWL SWEEP! {row.winner} captured ALL {len(swept)} territories from {row.loser}!")

    return new_state


def apply_week_results(state: GameState, text: str) -> GameState:
    """Raises ``ResultFormatError`` before touching any ownership when the batch is malformed."""
    rows = parse_results(text)
    week_rows = [row for row in rows if row.week == state.week]

    new_state = state.copy()
    for row in week_rows:
        new_state = apply_row(new_state, row)
    new_state.week = state.week + 1

    logger.info(
        "Applied %d of %d result rows for week %d", len(week_rows), len(rows), state.week,
    )
    return new_state
