BOARD_SIZE = 3

# Plies to look ahead; 9 exhausts a 3x3 board
SEARCH_DEPTH = 9

DIFFICULTIES = {
    "Easy": 1,
    "Medium": 3,
    "Hard": SEARCH_DEPTH,
}
DEFAULT_DIFFICULTY = "Hard"

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
