GRID_WIDTH = 8
GRID_HEIGHT = 8
CELL_SIZE = 60

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
# Vertical space reserved below the board for the preview and score lines.
HUD_BOTTOM_HEIGHT = 70
# Vertical space reserved above the board for the countdown.
HUD_TOP_HEIGHT = 50

# Colors a freshly spawned circle can take; only the first CIRCLE_COLORS are used.
COLOR_OPTIONS = {
    'red': (232, 77, 96),
    'blue': (74, 144, 226),
    'green': (80, 200, 120),
    'yellow': (245, 196, 45),
    'purple': (155, 89, 182),
    'orange': (243, 135, 47),
}
CIRCLE_COLORS = 4

# Seconds per round.
ROUND_DURATION = 60.0
# Chains at or above this length score double.
BONUS_CHAIN_THRESHOLD = 10
# Countdown turns to the warning color at or below this many seconds.
COUNTDOWN_WARNING_SECONDS = 5.0

# Circle radius and cursor hit radius as a fraction of CELL_SIZE.
CIRCLE_RADIUS_RATIO = 1 / 3
CURSOR_RADIUS_RATIO = 1 / 6

SHRINK_DURATION = 0.2
# First row of a fall takes FALL_STEP_DURATION, each further row 10% less.
FALL_STEP_DURATION = 0.15
FALL_STEP_DECAY = 0.9
