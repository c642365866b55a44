"""Configuration constants for the harvest package."""

import os

from .types import ScoringMatrix

# Classic Prisoner's Dilemma payoffs (share/share, share/hog, hog/share, hog/hog)
DEFAULT_SCORING = ScoringMatrix(
    cc=(3, 3),
    cd=(0, 5),
    dc=(5, 0),
    dd=(1, 1),
)

# Season length limits
DEFAULT_NUM_ROUNDS = 5
MAX_NUM_ROUNDS = int(os.environ.get("HARVEST_MAX_ROUNDS", "1000"))

# Replay pacing in seconds - configurable via environment variables
ENTER_DELAY = float(os.environ.get("HARVEST_ENTER_DELAY", "0.8"))
HOLD_DELAY = float(os.environ.get("HARVEST_HOLD_DELAY", "1.0"))
GAP_DELAY = float(os.environ.get("HARVEST_GAP_DELAY", "0.4"))
MATCH_GAP_DELAY = float(os.environ.get("HARVEST_MATCH_GAP_DELAY", "1.5"))
FINISH_DELAY = float(os.environ.get("HARVEST_FINISH_DELAY", "2.0"))

# Storage locations
ARCHIVE_PATH = os.environ.get("HARVEST_ARCHIVE_PATH", "data/village_archives.json")
RESULTS_PATH = os.environ.get("HARVEST_RESULTS_PATH", "data/seasons")

# Burr tracking configuration
BURR_TRACKING_ENABLED = os.environ.get("HARVEST_BURR_TRACKING", "false").lower() == "true"
BURR_PROJECT = os.environ.get("BURR_PROJECT", "harvest")
BURR_STORAGE_DIR = os.environ.get("BURR_STORAGE_DIR", "~/.burr")
