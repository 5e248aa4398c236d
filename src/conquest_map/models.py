from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .teams import TeamId, empty_ownership


class GamePhase(str, Enum):
    SETUP = "setup"
    DRAFT = "draft"
    SEASON = "season"


@dataclass(slots=True)
class Player:
    id: str
    name: str
    color: str
    teams_owned: list[TeamId] = field(default_factory=list)
    home_team_id: TeamId | None = None
    user_id: str | None = None

    @property
    def has_drafted(self) -> bool:
        return bool(self.teams_owned)

    def copy(self) -> Player:
        return replace(self, teams_owned=list(self.teams_owned))


@dataclass(slots=True)
class Settings:
    picks_per_player: int = 1
    use_margin_rules: bool = False
    playoff_boost: bool = False
    super_bowl_sweep: bool = False
    lock_division_rule: bool = False

    def __post_init__(self) -> None:
        if self.picks_per_player not in (1, 2, 3):
            raise ValueError(f"picks_per_player must be 1, 2 or 3 (got {self.picks_per_player}).")


@dataclass(frozen=True, slots=True)
class MatchResult:
    week: int
    winner: TeamId
    loser: TeamId
    margin: int | None = None
    is_playoff: bool = False
    is_super_bowl: bool = False


@dataclass(slots=True)
class GameState:
    phase: GamePhase = GamePhase.SETUP
    players: list[Player] = field(default_factory=list)
    draft_order: list[str] = field(default_factory=list)
    current_pick_index: int = 0
    ownership: dict[TeamId, str | None] = field(default_factory=empty_ownership)
    week: int = 1
    settings: Settings = field(default_factory=Settings)
    log: list[str] = field(default_factory=list)

    @property
    def total_picks(self) -> int:
        return len(self.players) * self.settings.picks_per_player

    def copy(self) -> GameState:
        """Working copy that can be mutated without touching this state."""
        return GameState(
            phase=self.phase,
            players=[player.copy() for player in self.players],
            draft_order=list(self.draft_order),
            current_pick_index=self.current_pick_index,
            ownership=dict(self.ownership),
            week=self.week,
            settings=replace(self.settings),
            log=list(self.log),
        )

    def player(self, player_id: str | None) -> Player | None:
        if not player_id:
            return None
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_name(self, player_id: str | None) -> str:
        player = self.player(player_id)
        if player is None:
            return str(player_id)
        return player.name

    def current_drafter_id(self) -> str | None:
        if 0 <= self.current_pick_index < len(self.draft_order):
            return self.draft_order[self.current_pick_index]
        return None
