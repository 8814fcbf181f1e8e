"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# FIELD
# =============================================================================
WIDTH = 900    # pixels
HEIGHT = 540   # pixels
TILE = 30      # background grid spacing

# =============================================================================
# ENTITY SIZES (pixels)
# =============================================================================
PLAYER_WIDTH = 34
PLAYER_HEIGHT = 34
CROP_WIDTH = 20
CROP_HEIGHT = 26
OBSTACLE_WIDTH = 26
OBSTACLE_HEIGHT = 46

# Where the farmer stands when a level starts
PLAYER_SPAWN_X = WIDTH / 2 - PLAYER_WIDTH / 2
PLAYER_SPAWN_Y = HEIGHT - 80

# =============================================================================
# MOVEMENT & ANIMATION
# =============================================================================
PLAYER_SPEED = 200.0          # pixels per second
SWAY_RATE = 2.0               # crop sway radians per second

# =============================================================================
# TIMING (all in seconds)
# =============================================================================
MAX_FRAME_DT = 0.033          # longest simulation step per frame
LEVEL_TRANSITION_DELAY = 2.0  # wall-clock pause between levels
WIN_OVERLAY_DURATION = 5.0    # how long the victory banner stays up

# =============================================================================
# LEVELS
# =============================================================================
MAX_LEVELS = 3
BASE_OBSTACLES = 2            # scarecrows on top of one per level
OBSTACLE_PLACEMENT_TRIES = 50
