"""Application constants."""

from datetime import time

# Accepted calendar dates are pinned to this local time of day
MIDDAY = time(12, 0, 0)

# Review panels
RECENT_EXERCISES_LIMIT = 2

# Epley 1RM divisor
EPLEY_REPS_DIVISOR = 30

# Column sizes in the record store
MAX_EXERCISE_NAME_LENGTH = 255
MAX_OWNER_ID_LENGTH = 128
