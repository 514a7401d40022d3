import os

from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL = os.getenv("SMARTMATCH_LOG_LEVEL", "WARNING")

# Ranking settings
DEFAULT_MAX_RESULTS = int(os.getenv("SMARTMATCH_MAX_RESULTS", "10"))
DEFAULT_MIN_SCORE = 0.0
WEIGHT_TOLERANCE = 1e-6

# Distance (km)
EARTH_RADIUS_KM = 6371.0088
FULL_CREDIT_RADIUS_KM = float(os.getenv("SMARTMATCH_FULL_CREDIT_RADIUS_KM", "2.0"))
CUTOFF_RADIUS_KM = float(os.getenv("SMARTMATCH_CUTOFF_RADIUS_KM", "30.0"))

# Skills
SKILL_MATCH_THRESHOLD = int(os.getenv("SMARTMATCH_SKILL_MATCH_THRESHOLD", "100"))
EXPERIENCE_CAP_YEARS = 5.0

# Small-sample shrinkage
MIN_REVIEWS = 3
MIN_COMPLETED_JOBS = 5
NEUTRAL_PRIOR = 0.5

# Availability
IMMEDIATE_WINDOW_HOURS = 24.0
THIS_WEEK_DAYS = 7

# Response time (minutes)
RESPONSE_HALF_LIFE_MINUTES = float(os.getenv("SMARTMATCH_RESPONSE_HALF_LIFE_MINUTES", "120"))
RESPONSE_STEEPNESS = 1.5

# Verification
TOP_RATED_BONUS = 0.05

# Match reasons
REASON_SHARE_THRESHOLD = float(os.getenv("SMARTMATCH_REASON_SHARE_THRESHOLD", "0.15"))
MAX_REASONS = 3
