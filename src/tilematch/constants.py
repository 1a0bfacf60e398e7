GRID_SIZE = 8

# Default palette: color name -> RGB used by presentation layers.
PALETTE = {
    'red':    (255, 0, 0),
    'green':  (0, 255, 0),
    'blue':   (0, 0, 255),
    'yellow': (255, 255, 0),
    'purple': (255, 0, 255),
    'cyan':   (0, 255, 255),
}

# A run needs at least this many same-colored tokens in a row or column.
MIN_RUN_LENGTH = 3

# Session termination after this many swap-driven matches.
MATCH_LIMIT = 15

# Points per removed token, on swaps and cascades alike.
SCORE_PER_TOKEN = 10

# Upper bound on cascade steps for one swap; exceeding it is an engine error.
MAX_CASCADE_STEPS = 1000
