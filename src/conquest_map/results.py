from __future__ import annotations

from typing import Iterable

from .config import RESULTS_HEADER, RESULTS_HEADER_PREFIX
from .models import MatchResult
from .teams import TeamId


class ResultFormatError(ValueError):
    """Weekly results text could not be parsed; nothing was applied."""


def _parse_team(value: str, line: str) -> TeamId:
    try:
        return TeamId(value)
    except ValueError:
        raise ResultFormatError(f'Unknown team "{value}" in row: {line}') from None


def _parse_margin(value: str) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_row(line: str) -> MatchResult:
    fields = [part.strip() for part in line.split(",")]
    fields += [""] * (6 - len(fields))
    week, winner, loser, margin, is_playoff, is_super_bowl = fields[:6]

    try:
        week_number = int(week)
    except ValueError:
        raise ResultFormatError(f'Invalid week value "{week}" in row: {line}') from None

    if not winner or not loser:
        raise ResultFormatError(f"Winner and loser must be provided in row: {line}")

    return MatchResult(
        week=week_number,
        winner=_parse_team(winner, line),
        loser=_parse_team(loser, line),
        margin=_parse_margin(margin),
        is_playoff=is_playoff == "true",
        is_super_bowl=is_super_bowl == "true",
    )


def parse_results(text: str) -> list[MatchResult]:
    trimmed = (text or "").strip()
    if not trimmed:
        raise ResultFormatError("Results data is empty.")

    lines = [line.strip() for line in trimmed.splitlines()]
    lines = [line for line in lines if line]
    if not lines[0].startswith(RESULTS_HEADER_PREFIX):
        raise ResultFormatError(f"Invalid results format. Expected header: {RESULTS_HEADER}")

    return [parse_row(line) for line in lines[1:]]


def format_results(rows: Iterable[MatchResult]) -> str:
    lines = [RESULTS_HEADER]
    for row in rows:
        margin = "" if row.margin is None else str(row.margin)
        lines.append(
            f"{row.week},{row.winner},{row.loser},{margin},"
            f"{'true' if row.is_playoff else 'false'},{'true' if row.is_super_bowl else 'false'}"
        )
    return "\n".join(lines)
