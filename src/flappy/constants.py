"""
constants.py: Centralized configuration for the simulation, persistence and frontend.
"""

# -------- Time --------
MS_PER_SECOND = 1000.0          # Deltas arrive in ms, velocities are in px/s
RENDER_FPS = 60
MAX_FRAME_DELTA_MS = 1000.0 / 30  # Clamp stalls so nothing tunnels through a pipe

# -------- Game World Config --------
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
GROUND_HEIGHT = 50
GROUND_Y = SCREEN_HEIGHT - GROUND_HEIGHT  # Ground threshold
TOP_BOUNDARY = 0

# -------- Actor Config --------
BIRD_X = SCREEN_WIDTH // 2 - 100  # Fixed bird X position (centre)
BIRD_START_Y = SCREEN_HEIGHT // 2
BIRD_WIDTH = 34
BIRD_HEIGHT = 24

# -------- Physics Config (Pixels / Second / Second) --------
GRAVITY_ACCEL = 1300.0          # Body gravity 1000 + world gravity 300
FLAP_IMPULSE = -350.0           # Velocity override on flap (pixels/s)
MAX_FALL_VELOCITY = 1000.0      # Clamping for stability (pixels/s)
TILT_UP = -15.0                 # Degrees, nose-up while rising
TILT_DOWN = 15.0                # Degrees, nose-down while falling

# -------- Pipe Config --------
PIPE_WIDTH = 80
PIPE_MARGIN = 50                # Minimum distance of the gap from top and from ground

# -------- Difficulty Curve --------
INITIAL_PIPE_VELOCITY_X = -150.0
PIPE_VELOCITY_X_PER_SCORE = -2.0  # More negative is faster
MAX_PIPE_VELOCITY_X = -300.0

DIFFICULTY_STEP_SCORE = 2       # Gap and spacing shrink every N points
INITIAL_PIPE_GAP = 150
PIPE_GAP_STEP = 2
MIN_PIPE_GAP = 100
INITIAL_PIPE_SPACING = 250      # Horizontal distance between consecutive pairs
PIPE_SPACING_STEP = 2
MIN_PIPE_SPACING = 150

INITIAL_SPAWN_DELAY_MS = 2000.0
SPAWN_DELAY_DECREMENT_PER_SCORE = 20.0
MIN_SPAWN_DELAY_MS = 1000.0

# -------- Lifecycle Timing --------
START_DELAY_MS = 100.0          # Lets the start cue play before gameplay replaces the menu
RESTART_ARM_DELAY_MS = 500.0    # The crash input must not restart the game

# -------- Scoring / Presentation Hooks --------
MILESTONE_INTERVAL = 10
SOUNDTRACK_THRESHOLDS = (20, 40, 60, 80, 100)  # Score needed for levels 2..6

# -------- Persistence --------
DB_FILE = "flappy_highscore.db"
HIGH_SCORE_KEY = "highScore"
