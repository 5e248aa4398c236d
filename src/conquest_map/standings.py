from __future__ import annotations

from dataclasses import dataclass

from .config import INSTANT_WIN_PERCENTAGE, TOTAL_TERRITORIES
from .conquest import territories_of
from .models import GameState, Player


@dataclass(slots=True)
class Standing:
    player: Player
    territories: int
    percentage: float


def calculate_standings(state: GameState) -> list[Standing]:
    rows = []
    for player in state.players:
        count = len(territories_of(state, player.id))
        rows.append(Standing(player=player, territories=count, percentage=100.0 * count / TOTAL_TERRITORIES))
    # sorted() is stable, so tied players keep roster order.
    return sorted(rows, key=lambda row: row.territories, reverse=True)


def check_instant_win(state: GameState) -> str | None:
    for standing in calculate_standings(state):
        if standing.percentage >= INSTANT_WIN_PERCENTAGE:
            return standing.player.name
    return None


def determine_winner(state: GameState) -> list[str]:
    standings = calculate_standings(state)
    if not standings:
        return []
    top = standings[0].territories
    return [row.player.name for row in standings if row.territories == top]


def announce_instant_win(state: GameState) -> GameState:
    winner = check_instant_win(state)
    if winner is None:
        return state
    next_state = state.copy()
    next_state.log.append(f"{winner} has won by controlling {INSTANT_WIN_PERCENTAGE:.0f}% of the map!")
    return next_state
