"""Internal constants shared across the library."""

NO_PLATE = "NO PLATE"

# ------------------------------------------------------------------
# Directional selection
# ------------------------------------------------------------------

SCAN_RANGE: float = 40.0
ALIGNMENT_THRESHOLD: float = 0.7

# ------------------------------------------------------------------
# Timing (seconds)
# ------------------------------------------------------------------

SCAN_INTERVAL: float = 0.25
CACHE_TTL: float = 30.0
MARKER_MAX_AGE: float = 25.0
NOTIFICATION_COOLDOWN: float = 5.0
TOGGLE_DEBOUNCE: float = 0.5

# ------------------------------------------------------------------
# Eviction ranges
# ------------------------------------------------------------------

CACHE_RANGE: float = 60.0
MARKER_RANGE: float = 100.0

# ------------------------------------------------------------------
# Qualifying observer vehicles
# ------------------------------------------------------------------

EMERGENCY_VEHICLE_CLASS = "emergency"
QUALIFYING_MODEL_KEYWORDS: tuple[str, ...] = (
    "police",
    "sheriff",
    "fbi",
    "fire",
    "ambulance",
    "pranger",
    "riot",
)
