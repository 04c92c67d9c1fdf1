FIELD_SIZE = 600
FIELD_CENTER = FIELD_SIZE / 2
BALL_SIZE = 10
BALL_SPEED = 3
SPEED_UP_FACTOR = 1.05
PADDLE_STEP = 10
WINNING_SCORE = 10

MAX_PLAYERS = 4
MIN_PLAYERS_TO_START = 2
MAX_NAME_LENGTH = 24
LOBBY_CODE_LENGTH = 4
LOBBY_CODE_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

STATUS_WAITING = "WAITING"
STATUS_PLAYING = "PLAYING"
STATUS_GAME_OVER = "GAME_OVER"

SIDE_TOP = "TOP"
SIDE_RIGHT = "RIGHT"
SIDE_BOTTOM = "BOTTOM"
SIDE_LEFT = "LEFT"

# Join order -> guarded side.
SIDE_ROTATION = (SIDE_TOP, SIDE_RIGHT, SIDE_BOTTOM, SIDE_LEFT)

# side -> (x, y, width, height)
PADDLE_LAYOUT = {
    SIDE_TOP: (250, 20, 100, 10),
    SIDE_RIGHT: (570, 250, 10, 100),
    SIDE_BOTTOM: (250, 570, 100, 10),
    SIDE_LEFT: (20, 250, 10, 100),
}

HORIZONTAL_SIDES = frozenset({SIDE_TOP, SIDE_BOTTOM})

# Wall the ball crossed -> side whose guard is awarded the point.
SCORING_SIDE = {
    SIDE_TOP: SIDE_BOTTOM,
    SIDE_RIGHT: SIDE_LEFT,
    SIDE_BOTTOM: SIDE_TOP,
    SIDE_LEFT: SIDE_RIGHT,
}

DIRECTION_UP = "UP"
DIRECTION_DOWN = "DOWN"
DIRECTION_LEFT = "LEFT"
DIRECTION_RIGHT = "RIGHT"

UNKNOWN_WINNER = "Unknown"

CLOSE_POLICY_VIOLATION = 1008
