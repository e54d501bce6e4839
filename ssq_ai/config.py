"""
Configuration for SSQ AI - Double Color Ball
"""
import os
import logging
from pathlib import Path
from math import comb

# ============================================================================
# ENVIRONMENT DETECTION
# ============================================================================
IS_RAILWAY = os.getenv("RAILWAY_ENVIRONMENT") is not None
IS_CLOUD = IS_RAILWAY or os.getenv("SSQ_CLOUD", "0") == "1"

# ============================================================================
# PATHS
# ============================================================================
if IS_RAILWAY:
    BASE_DIR = Path("/app")
else:
    BASE_DIR = Path(__file__).resolve().parent.parent

DATA_DIR = Path(os.getenv("SSQ_DATA_DIR", BASE_DIR / "data"))
DATA_DIR.mkdir(parents=True, exist_ok=True)

CSV_FILENAME = "ssq_history.csv"
CSV_PATH = DATA_DIR / CSV_FILENAME
DB_PATH = DATA_DIR / "ssq.db"

# ============================================================================
# GAME CONFIGURATION - DOUBLE COLOR BALL (6/33 + 1/16)
# ============================================================================
RED_BALL_MIN = 1
RED_BALL_MAX = 33
RED_BALLS_PER_DRAW = 6
BLUE_BALL_MIN = 1
BLUE_BALL_MAX = 16

RED_NUMBERS = list(range(RED_BALL_MIN, RED_BALL_MAX + 1))
BLUE_NUMBERS = list(range(BLUE_BALL_MIN, BLUE_BALL_MAX + 1))

GAME_NAME = "Double Color Ball"
DATE_FORMAT = "%Y-%m-%d"

TOTAL_COMBINATIONS = comb(RED_BALL_MAX, RED_BALLS_PER_DRAW) * BLUE_BALL_MAX  # 17,721,088

# ============================================================================
# HISTORY
# ============================================================================
MAX_RECORDS = 500
LAST_UPDATE_PREFIX = "# LastUpdate: "
CSV_COLUMNS = ["issue", "date", "red1", "red2", "red3", "red4", "red5", "red6", "blue_ball"]

# ============================================================================
# PREDICTION
# ============================================================================
PREDICTION_COUNT = 10
ITERATION_COUNT = int(os.getenv("SSQ_ITERATION_COUNT", 10000))

# "hot" weighting: weight = frequency + HOT_SMOOTHING + HOT_RECENCY_BONUS * hits / window
# The bonus is kept below 1 so it never outranks a whole extra appearance.
HOT_RECENT_WINDOW = int(os.getenv("SSQ_HOT_RECENT_WINDOW", 20))
HOT_RECENCY_BONUS = min(float(os.getenv("SSQ_HOT_RECENCY_BONUS", 0.5)), 0.99)
HOT_SMOOTHING = float(os.getenv("SSQ_HOT_SMOOTHING", 1.0))

# ============================================================================
# LOGGING
# ============================================================================
LOG_LEVEL = os.getenv("SSQ_LOG_LEVEL", "INFO" if IS_CLOUD else "DEBUG").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler()]
)

logger = logging.getLogger("ssq_ai.config")

logger.debug(f"Environment: Cloud={IS_CLOUD}, Railway={IS_RAILWAY}")
logger.debug(f"Data directory: {DATA_DIR}")
logger.debug(f"History CSV: {CSV_PATH}")
logger.debug(f"Total combinations: {TOTAL_COMBINATIONS:,}")
logger.debug(f"Hot window: {HOT_RECENT_WINDOW} draws, bonus {HOT_RECENCY_BONUS}, "
             f"smoothing {HOT_SMOOTHING}")
