"""Static game configuration constants."""

TOTAL_TERRITORIES = 32
INSTANT_WIN_PERCENTAGE = 90.0
MARGIN_BONUS_THRESHOLD = 8

MIN_PLAYERS = 2
MAX_PLAYERS = 8
PICKS_PER_PLAYER_OPTIONS: tuple[int, ...] = (1, 2, 3)

RESULTS_HEADER_PREFIX = "week,winner,loser"
RESULTS_HEADER = "week,winner,loser,margin,isPlayoff,isSuperBowl"

PLAYER_COLORS: tuple[str, ...] = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FECA57",
    "#FF9FF3",
    "#54A0FF",
    "#48DBFB",
)

STATE_PATH_ENV = "CONQUEST_STATE_PATH"
DEFAULT_STATE_FILENAME = "conquest_state.json"
