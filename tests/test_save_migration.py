import json

import pytest

from conquest_map.draft import pick_team, start_draft
from conquest_map.lobby import add_players, new_game
from conquest_map.models import GamePhase, Settings
from conquest_map.persistence import SnapshotStore, deserialize_state, serialize_state
from conquest_map.teams import TEAM_IDS, TeamId


def _drafted_state():
    state = add_players(new_game(Settings(picks_per_player=1, use_margin_rules=True)), ["Ann", "Bob"])
    state = start_draft(state)
    state = pick_team(state, TeamId.KC)
    return pick_team(state, TeamId.CIN)


def test_snapshot_round_trip_keeps_state() -> None:
    state = _drafted_state()
    restored = deserialize_state(json.loads(json.dumps(serialize_state(state))))
    assert restored == state


def test_snapshot_ownership_lists_every_team() -> None:
    payload = serialize_state(new_game())
    assert list(payload["ownership"]) == [team_id.value for team_id in TEAM_IDS]


@pytest.mark.regression
def test_loads_legacy_browser_snapshot(tmp_path) -> None:
    path = tmp_path / "conquest_state.json"
    legacy = {
        "phase": "season",
        "players": [
            {"id": "p1", "name": "Ann", "color": "#E31837", "teamsOwned": ["KC", "DEN"]},
            {"id": "p2", "name": "Bob", "color": "#FB4F14", "teamsOwned": ["CIN"], "homeTeamId": "CIN"},
        ],
        "draftOrder": ["p1", "p2", "p2", "p1"],
        "currentPickIndex": 4,
        "snakeForward": True,
        "ownership": {"KC": "p1", "DEN": "p1", "CIN": "p2", "SF": "ghost"},
        "week": 3,
        "settings": {"picksPerPlayer": 2, "useMarginRules": True, "playoffBoost": False, "superBowlSweep": True},
        "log": ["Draft started!"],
    }
    path.write_text(json.dumps(legacy), encoding="utf-8")
    state = SnapshotStore(path).load()
    assert state is not None
    assert state.phase == GamePhase.SEASON
    assert state.player("p1").home_team_id == TeamId.KC
    assert state.player("p2").home_team_id == TeamId.CIN
    assert state.settings.picks_per_player == 2
    assert state.settings.super_bowl_sweep is True
    assert state.settings.lock_division_rule is False
    assert state.ownership[TeamId.SF] is None
    assert len(state.ownership) == 32
    assert state.draft_order == ["p1", "p2", "p2", "p1"]
    assert state.week == 3


@pytest.mark.regression
def test_rejects_future_save_version_with_clear_error(tmp_path) -> None:
    path = tmp_path / "conquest_state.json"
    path.write_text(json.dumps({"save_version": 999, "state": {}}), encoding="utf-8")
    store = SnapshotStore(path)
    assert store.load() is None
    assert "Unsupported game state version" in store.last_load_error


@pytest.mark.regression
def test_corrupt_file_falls_back_with_error(tmp_path) -> None:
    path = tmp_path / "conquest_state.json"
    path.write_text("{not json", encoding="utf-8")
    store = SnapshotStore(path)
    assert store.load() is None
    assert "Failed to load game state" in store.last_load_error


@pytest.mark.regression
def test_state_save_includes_save_version_and_backup(tmp_path) -> None:
    path = tmp_path / "conquest_state.json"
    backup_path = tmp_path / "conquest_state.json.bak"
    store = SnapshotStore(path)

    store.save(new_game())
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["save_version"] == SnapshotStore.SAVE_VERSION
    assert not backup_path.exists()

    # Overwriting keeps the previous save as .bak.
    store.save(_drafted_state())
    assert backup_path.exists()
    assert store.load().phase == GamePhase.SEASON

    store.clear()
    assert not path.exists()


@pytest.mark.regression
def test_dropped_draft_order_entries_keep_the_same_drafter() -> None:
    raw = {
        "phase": "draft",
        "players": [
            {"id": "a", "name": "Ann", "color": "#E31837"},
            {"id": "b", "name": "Bob", "color": "#FB4F14"},
        ],
        "draft_order": ["ghost", "a", "b", "ghost"],
        "current_pick_index": 1,
    }
    state = deserialize_state(raw)
    assert state.draft_order == ["a", "b"]
    assert state.current_pick_index == 0
    assert state.current_drafter_id() == "a"

    restored = deserialize_state(json.loads(json.dumps(serialize_state(state))))
    assert restored.current_drafter_id() == "a"
    assert pick_team(restored, TeamId.KC).ownership[TeamId.KC] == "a"
