"""
constants.py: Centralized configuration for game, physics and storage settings.
"""

import math

# -------- Timing --------
RENDER_FPS = 60                 # Frame cap for the pygame client
MAX_TICK_DT = 0.25              # Longest elapsed time a single tick may apply (seconds)

# -------- Game World Config --------
SCREEN_WIDTH = 400
SCREEN_HEIGHT = 800

# -------- Flyer Config --------
FLYER_SIZE = 50                 # Sprite width and height
FLYER_RADIUS = FLYER_SIZE / 2.5 # Collision radius, smaller than the sprite

# -------- Pipe Config --------
PIPE_WIDTH = 80
PIPE_GAP = 120
PIPE_SPEED = 147.0              # Horizontal speed (pixels/second)
PIPE_SPAWN_INTERVAL = 1.35      # Seconds of playing time between pairs
MIN_PIPE_HEIGHT = 100
PIPE_MARGIN = 100               # Keeps the gap away from the bottom edge
SCORE_TRIGGER_WIDTH = 2
SCORE_INCREMENT = 10

# -------- Physics Config (Pixels / Second / Second) --------
POINTS_PER_METER = 150
GRAVITY_ACCEL = -9.8 * 1.1 * POINTS_PER_METER
LINEAR_DAMPING = 1.1
MAX_VELOCITY = 400.0            # Clamp for |vy|
IMPULSE_FORCE = 400.0           # Upward velocity set by a flap

# -------- Rotation Config (radians) --------
ROTATION_SCALE = 0.001          # Radians per unit of vertical velocity
MAX_ROTATION = math.pi / 4
MIN_ROTATION = -math.pi / 2
ROTATION_DURATION = 0.3         # Seconds to ease toward the target angle

# -------- Storage & Audio --------
DB_FILE = "chillflap.db"
HIGH_SCORE_KEY = "HighScore"
MUSIC_FILE = "assets/backgroundmusic.mp3"
MUSIC_VOLUME = 0.2
