"""Configuration settings for the application."""
import math
from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
STATIC_DIR = DATA_DIR / "static"
OUTPUT_DIR = DATA_DIR / "output"

# Background image served to every diagram
BACKGROUND_IMAGE_FILE = STATIC_DIR / "volleyball-court.jpg"

# Logical canvas size (all diagram coordinates are expressed in this space)
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 400

# Largest court image the API will generate, per side
MAX_COURT_IMAGE_SIZE = 4096

# Drawing constants, in logical units
STROKE_WIDTH = 3
ARROW_HEAD_LENGTH = 15
ARROW_HEAD_ANGLE = math.pi / 6  # 30 degrees either side of the reversed shaft
PLAYER_RADIUS = 15

# Player label text
LABEL_COLOR = "#FFFFFF"
LABEL_FONT_SCALE = 0.45  # cv2 font scale per logical unit, roughly a 12px glyph
LABEL_FONT_THICKNESS = 2  # bold

# Shown instead of the court while no background is available
FALLBACK_BACKGROUND_COLOR = "#E8F4F8"

# Background download timeout (seconds) for http(s) references
BACKGROUND_FETCH_TIMEOUT = 10.0


# Ensure directories exist
def ensure_directories():
    """Create necessary directories if they don't exist."""
    for directory in [STATIC_DIR, OUTPUT_DIR]:
        directory.mkdir(parents=True, exist_ok=True)
