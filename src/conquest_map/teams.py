from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TeamId(str, Enum):
    ARI = "ARI"
    ATL = "ATL"
    BAL = "BAL"
    BUF = "BUF"
    CAR = "CAR"
    CHI = "CHI"
    CIN = "CIN"
    CLE = "CLE"
    DAL = "DAL"
    DEN = "DEN"
    DET = "DET"
    GB = "GB"
    HOU = "HOU"
    IND = "IND"
    JAX = "JAX"
    KC = "KC"
    LV = "LV"
    LAC = "LAC"
    LAR = "LAR"
    MIA = "MIA"
    MIN = "MIN"
    NE = "NE"
    NO = "NO"
    NYG = "NYG"
    NYJ = "NYJ"
    PHI = "PHI"
    PIT = "PIT"
    SEA = "SEA"
    SF = "SF"
    TB = "TB"
    TEN = "TEN"
    WAS = "WAS"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Territory:
    id: TeamId
    name: str
    city: str
    conference: str
    division: str
    color: str

    @property
    def full_name(self) -> str:
        return f"{self.city} {self.name}"


TEAMS: tuple[Territory, ...] = (
    # AFC East
    Territory(TeamId.BUF, "Bills", "Buffalo", "AFC", "East", "#00338D"),
    Territory(TeamId.MIA, "Dolphins", "Miami", "AFC", "East", "#008E97"),
    Territory(TeamId.NE, "Patriots", "New England", "AFC", "East", "#002244"),
    Territory(TeamId.NYJ, "Jets", "New York", "AFC", "East", "#125740"),
    # AFC North
    Territory(TeamId.BAL, "Ravens", "Baltimore", "AFC", "North", "#241773"),
    Territory(TeamId.CIN, "Bengals", "Cincinnati", "AFC", "North", "#FB4F14"),
    Territory(TeamId.CLE, "Browns", "Cleveland", "AFC", "North", "#311D00"),
    Territory(TeamId.PIT, "Steelers", "Pittsburgh", "AFC", "North", "#FFB612"),
    # AFC South
    Territory(TeamId.HOU, "Texans", "Houston", "AFC", "South", "#03202F"),
    Territory(TeamId.IND, "Colts", "Indianapolis", "AFC", "South", "#002C5F"),
    Territory(TeamId.JAX, "Jaguars", "Jacksonville", "AFC", "South", "#006778"),
    Territory(TeamId.TEN, "Titans", "Tennessee", "AFC", "South", "#4B92DB"),
    # AFC West
    Territory(TeamId.DEN, "Broncos", "Denver", "AFC", "West", "#FB4F14"),
    Territory(TeamId.KC, "Chiefs", "Kansas City", "AFC", "West", "#E31837"),
    Territory(TeamId.LV, "Raiders", "Las Vegas", "AFC", "West", "#000000"),
    Territory(TeamId.LAC, "Chargers", "Los Angeles", "AFC", "West", "#0080C6"),
    # NFC East
    Territory(TeamId.DAL, "Cowboys", "Dallas", "NFC", "East", "#003594"),
    Territory(TeamId.NYG, "Giants", "New York", "NFC", "East", "#0B2265"),
    Territory(TeamId.PHI, "Eagles", "Philadelphia", "NFC", "East", "#004C54"),
    Territory(TeamId.WAS, "Commanders", "Washington", "NFC", "East", "#5A1414"),
    # NFC North
    Territory(TeamId.CHI, "Bears", "Chicago", "NFC", "North", "#0B162A"),
    Territory(TeamId.DET, "Lions", "Detroit", "NFC", "North", "#0076B6"),
    Territory(TeamId.GB, "Packers", "Green Bay", "NFC", "North", "#203731"),
    Territory(TeamId.MIN, "Vikings", "Minnesota", "NFC", "North", "#4F2683"),
    # NFC South
    Territory(TeamId.ATL, "Falcons", "Atlanta", "NFC", "South", "#A71930"),
    Territory(TeamId.CAR, "Panthers", "Carolina", "NFC", "South", "#0085CA"),
    Territory(TeamId.NO, "Saints", "New Orleans", "NFC", "South", "#D3BC8D"),
    Territory(TeamId.TB, "Buccaneers", "Tampa Bay", "NFC", "South", "#D50A0A"),
    # NFC West
    Territory(TeamId.ARI, "Cardinals", "Arizona", "NFC", "West", "#97233F"),
    Territory(TeamId.LAR, "Rams", "Los Angeles", "NFC", "West", "#003594"),
    Territory(TeamId.SF, "49ers", "San Francisco", "NFC", "West", "#AA0000"),
    Territory(TeamId.SEA, "Seahawks", "Seattle", "NFC", "West", "#002244"),
)

TEAM_MAP: dict[TeamId, Territory] = {team.id: team for team in TEAMS}
TEAM_IDS: tuple[TeamId, ...] = tuple(team.id for team in TEAMS)
TEAM_COLORS: dict[TeamId, str] = {team.id: team.color for team in TEAMS}


def get_team(team_id: TeamId | str) -> Territory:
    return TEAM_MAP[TeamId(team_id)]


def shares_division(first: TeamId, second: TeamId) -> bool:
    a = TEAM_MAP[first]
    b = TEAM_MAP[second]
    return a.conference == b.conference and a.division == b.division


def empty_ownership() -> dict[TeamId, str | None]:
    return {team_id: None for team_id in TEAM_IDS}
