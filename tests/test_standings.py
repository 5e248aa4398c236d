from conquest_map.models import GamePhase, GameState, Player
from conquest_map.standings import announce_instant_win, calculate_standings, check_instant_win, determine_winner
from conquest_map.teams import TEAM_IDS, empty_ownership


def _state(counts: dict[str, int]) -> GameState:
    ownership = empty_ownership()
    team_iter = iter(TEAM_IDS)
    for pid, count in counts.items():
        for _ in range(count):
            ownership[next(team_iter)] = pid
    players = [Player(id=pid, name=pid.title(), color="#123456") for pid in counts]
    return GameState(phase=GamePhase.SEASON, players=players, ownership=ownership)


def test_standings_sorted_and_stable() -> None:
    state = _state({"ann": 3, "bob": 8, "cat": 3, "dan": 0})
    rows = calculate_standings(state)
    assert [row.player.id for row in rows] == ["bob", "ann", "cat", "dan"]
    assert rows[0].territories == 8
    assert rows[0].percentage == 25.0


def test_percentages_never_exceed_100() -> None:
    state = _state({"ann": 20, "bob": 10})
    total = sum(row.percentage for row in calculate_standings(state))
    assert total <= 100
    assert total == 100 * 30 / 32


def test_instant_win_at_ninety_percent() -> None:
    assert check_instant_win(_state({"ann": 28, "bob": 4})) is None
    assert check_instant_win(_state({"ann": 29, "bob": 3})) == "Ann"


def test_announce_instant_win_appends_log() -> None:
    state = _state({"ann": 30, "bob": 2})
    announced = announce_instant_win(state)
    assert announced.log[-1] == "Ann has won by controlling 90% of the map!"
    assert state.log == []
    quiet = _state({"ann": 10, "bob": 2})
    assert announce_instant_win(quiet) is quiet


def test_determine_winner_supports_ties() -> None:
    assert determine_winner(_state({"ann": 6, "bob": 6, "cat": 2})) == ["Ann", "Bob"]
    assert determine_winner(_state({"ann": 1, "bob": 6})) == ["Bob"]
    assert determine_winner(GameState()) == []
