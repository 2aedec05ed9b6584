"""
Drift, Outreach and Streak Thresholds Configuration.

Central configuration for the constants used in:
- Relationship drift classification
- Outreach message time context
- Habit completion rate and streak presentation

Edit this file to tune how drift and streaks are reported.
"""

# =============================================================================
# RELATIONSHIP DRIFT
# =============================================================================
# ok       : days_since <= cadence * DUE_SOON_RATIO
# dueSoon  : cadence * DUE_SOON_RATIO < days_since <= cadence
# overdue  : days_since > cadence

DUE_SOON_RATIO = 0.75

DRIFT_COLORS = {
    "ok": "#10B981",       # green
    "dueSoon": "#F59E0B",  # amber
    "overdue": "#EF4444",  # red
}


# =============================================================================
# OUTREACH TIME CONTEXT
# =============================================================================
# Days since last contact after which the outreach drafts acknowledge the gap.

A_WHILE_AFTER_DAYS = 30
WAY_TOO_LONG_AFTER_DAYS = 90

A_WHILE_CONTEXT = "It's been a while. "
WAY_TOO_LONG_CONTEXT = "It's been way too long! "


# =============================================================================
# HABIT COMPLETION
# =============================================================================

COMPLETION_WINDOW_DAYS = 30  # Rolling window for completion rate
MAX_COMPLETION_RATE = 100
