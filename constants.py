"""Shared constants for korfball statistics.

Single source of truth for shot types, aggregation windows, and display labels.
"""

# ── Shot types ──────────────────────────────────────────────────────────
# Canonical order matters: it drives iteration, tie-breaks and report columns.
SHOT_TYPES = (
    {"id": "distance",   "label": "Afstandschot",  "short": "AS"},
    {"id": "close",      "label": "Kans bij korf", "short": "KK"},
    {"id": "penalty",    "label": "Strafworp",     "short": "SW"},
    {"id": "freeball",   "label": "Vrije bal",     "short": "VB"},
    {"id": "runthrough", "label": "Doorloopbal",   "short": "DL"},
    {"id": "outstart",   "label": "Uitstart",      "short": "US"},
    {"id": "other",      "label": "Overig",        "short": "OV"},
)

SHOT_TYPE_ORDER = tuple(t["id"] for t in SHOT_TYPES)
SHOT_TYPE_LABELS = {t["id"]: t["label"] for t in SHOT_TYPES}
SHOT_TYPE_SHORT = {t["id"]: t["short"] for t in SHOT_TYPES}

# Shot type assigned to goals recorded without one
DEFAULT_SHOT_TYPE = "other"

# ── Results ─────────────────────────────────────────────────────────────
RESULT_WIN = "W"
RESULT_DRAW = "D"
RESULT_LOSS = "V"  # "verloren"
RESULT_ORDER = [RESULT_WIN, RESULT_DRAW, RESULT_LOSS]

TEAM_OWN = "own"
TEAM_OPPONENT = "opponent"

# ── Aggregation windows ─────────────────────────────────────────────────
FORM_WINDOW = 5                  # matches in the W/D/V form string
TREND_WINDOW = 10                # matches in the "recent" shot-type window
TREND_DEAD_ZONE_PCT = 3          # |recent% - season%| <= this is "stable"
PLAYER_OF_MONTH_WINDOW_DAYS = 30  # exact 24h days, not calendar months
TOP_PLAYERS_LIMIT = 5

# ── Display ─────────────────────────────────────────────────────────────
MONTH_LABELS = (
    "jan", "feb", "mrt", "apr", "mei", "jun",
    "jul", "aug", "sep", "okt", "nov", "dec",
)

# Fallback for records stored without a player name
UNKNOWN_NAME = "Onbekend"
