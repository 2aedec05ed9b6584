"""
Habit Streaks - Derive streak stats from a habit's completion log.

The log is sparse: one entry per completed (or explicitly skipped) day,
with days that have no entry at all simply missing. A skip is a recorded
decision rather than an absence of data, but for streak purposes both
break the run identically.

Computed values:
- current_streak: consecutive days with a completion, counting back from today
- longest_streak: longest run of consecutive completion days anywhere in history
- total_completions: all non-skipped entries
- completion_rate: completions in the last COMPLETION_WINDOW_DAYS as a percentage
- streak_level / fire_emojis / streak_color: presentation tier for current_streak
"""
import bisect
import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional

from api.services.dates import local_day, start_of_day, to_local, get_local_timezone
from config.engine_thresholds import COMPLETION_WINDOW_DAYS, MAX_COMPLETION_RATE
from config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class HabitLogEntry:
    """One row of a habit's log."""
    completed_at: datetime
    skipped: bool = False
    skip_reason: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class StreakTier:
    level: int
    fire_emojis: str
    color: str


# (lower bound inclusive, tier). Must stay sorted by lower bound.
STREAK_TIERS: list[tuple[int, StreakTier]] = [
    (0, StreakTier(0, "", "#9CA3AF")),
    (1, StreakTier(1, "\U0001F331", "#10B981")),
    (3, StreakTier(2, "\U0001F525", "#F59E0B")),
    (7, StreakTier(3, "\U0001F525" * 2, "#F97316")),
    (14, StreakTier(4, "\U0001F525" * 3, "#EF4444")),
    (30, StreakTier(5, "\U0001F525" * 4, "#DC2626")),
    (60, StreakTier(6, "\U0001F525" * 5, "#B91C1C")),
    (100, StreakTier(7, "\U0001F525" * 5 + "\U0001F4AF", "#7C2D12")),
]

STREAK_MESSAGES: list[tuple[int, str]] = [
    (0, "Start your streak today!"),
    (1, "Great start! Keep it going!"),
    (2, "Building momentum!"),
    (7, "You're on fire!"),
    (14, "Incredible consistency!"),
    (30, "Unstoppable!"),
    (60, "Legendary streak!"),
    (100, "HALL OF FAME! \U0001F3C6"),
]

_TIER_BOUNDS = [bound for bound, _ in STREAK_TIERS]
_MESSAGE_BOUNDS = [bound for bound, _ in STREAK_MESSAGES]


@dataclass
class StreakInfo:
    current_streak: int
    longest_streak: int
    total_completions: int
    completion_rate: int
    streak_level: int
    fire_emojis: str
    streak_color: str
    streak_message: str

    def to_dict(self) -> dict:
        return asdict(self)


def get_streak_tier(streak: int) -> StreakTier:
    """Presentation tier: the entry with the largest lower bound <= streak."""
    idx = bisect.bisect_right(_TIER_BOUNDS, max(streak, 0)) - 1
    return STREAK_TIERS[idx][1]


def get_streak_message(streak: int) -> str:
    """Encouragement line shown under the streak counter."""
    idx = bisect.bisect_right(_MESSAGE_BOUNDS, max(streak, 0)) - 1
    return STREAK_MESSAGES[idx][1]


def _completion_days(logs: list[HabitLogEntry], tz: tzinfo) -> set[date]:
    return {local_day(log.completed_at, tz) for log in logs if not log.skipped}


def _current_streak(days: set[date], today: date) -> int:
    streak = 0
    cursor = today
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def _longest_streak(days: set[date]) -> int:
    longest = 0
    run = 0
    previous: Optional[date] = None
    # Days are already distinct, so repeat completions on one day can't inflate a run
    for day in sorted(days):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def _completion_rate(logs: list[HabitLogEntry], now: datetime, tz: tzinfo) -> int:
    # Aware arithmetic in one zone is wall-clock: same local time 30 days back
    cutoff = to_local(now, tz) - timedelta(days=COMPLETION_WINDOW_DAYS)
    recent = sum(
        1 for log in logs
        if not log.skipped and to_local(log.completed_at, tz) >= cutoff
    )
    rate = round(recent / COMPLETION_WINDOW_DAYS * 100)
    if settings.cap_completion_rate:
        rate = min(rate, MAX_COMPLETION_RATE)
    return rate


def calculate_streak(
    logs: Iterable[HabitLogEntry],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> StreakInfo:
    """
    Compute streak statistics for one habit.

    Args:
        logs: The habit's log entries, in any order
        now: Current instant
        tz: Timezone for day boundaries (defaults to HOMEBASE_TIMEZONE)

    Returns:
        StreakInfo. An empty log yields all zeros and the tier 0 presentation.
    """
    tz = tz or get_local_timezone()
    logs = list(logs)

    days = _completion_days(logs, tz)
    today = start_of_day(now, tz).date()

    current = _current_streak(days, today)
    longest = _longest_streak(days)
    total = sum(1 for log in logs if not log.skipped)
    rate = _completion_rate(logs, now, tz) if logs else 0

    tier = get_streak_tier(current)

    logger.debug(
        f"Streak over {len(logs)} log entries: current={current}, "
        f"longest={longest}, rate={rate}%"
    )

    return StreakInfo(
        current_streak=current,
        longest_streak=longest,
        total_completions=total,
        completion_rate=rate,
        streak_level=tier.level,
        fire_emojis=tier.fire_emojis,
        streak_color=tier.color,
        streak_message=get_streak_message(current),
    )


def is_completed_today(
    logs: Iterable[HabitLogEntry],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True when today has a non-skipped entry."""
    tz = tz or get_local_timezone()
    return local_day(now, tz) in _completion_days(list(logs), tz)
