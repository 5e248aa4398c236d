from __future__ import annotations

import argparse
import logging

import uvicorn

from .api import ConquestService, build_app
from .conquest import owner_of
from .models import GameState
from .standings import calculate_standings, check_instant_win, determine_winner
from .teams import TEAMS


def format_standings(state: GameState) -> str:
    lines = [f"Week {state.week}", "Pos Player               Terr     Pct"]
    for idx, row in enumerate(calculate_standings(state), start=1):
        lines.append(f"{idx:>3} {row.player.name:<20} {row.territories:>4} {row.percentage:>6.1f}%")
    winner = check_instant_win(state)
    if winner:
        lines.append(f"Instant winner: {winner}")
    elif state.players:
        lines.append("Leading: " + ", ".join(determine_winner(state)))
    return "\n".join(lines)


def format_ownership(state: GameState) -> str:
    lines = ["Team Conf Div    Owner"]
    for team in TEAMS:
        owner = owner_of(state, team.id)
        label = owner.name if owner else "-"
        if owner is not None and owner.home_team_id == team.id:
            label += " (home)"
        lines.append(f"{team.id.value:<4} {team.conference:<4} {team.division:<6} {label}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the conquest map API server or print the current standings.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--state-path", default=None, help="Game state JSON file.")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--print-standings", action="store_true", help="Print standings and ownership, then exit.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    service = ConquestService(state_path=args.state_path)
    if service.last_load_error:
        logging.getLogger(__name__).warning(service.last_load_error)
    if args.print_standings:
        print(format_standings(service.state))
        print()
        print(format_ownership(service.state))
        return
    uvicorn.run(build_app(service), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
