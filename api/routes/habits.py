"""
Habit API endpoints for Homebase.
"""
from datetime import datetime
from typing import Optional
import logging

from fastapi import APIRouter
from pydantic import BaseModel

from api.services.dates import get_local_timezone
from api.services.habit_streaks import (
    HabitLogEntry,
    calculate_streak,
    is_completed_today,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/habits", tags=["habits"])


class HabitLogIn(BaseModel):
    completed_at: datetime
    skipped: bool = False
    skip_reason: Optional[str] = None
    note: Optional[str] = None


class StreakRequest(BaseModel):
    logs: list[HabitLogIn]
    now: Optional[datetime] = None
    # Presentation fields, echoed back untouched
    id: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class StreakResponse(BaseModel):
    current_streak: int
    longest_streak: int
    total_completions: int
    completion_rate: int
    streak_level: int
    fire_emojis: str
    streak_color: str
    streak_message: str
    completed_today: bool
    id: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


@router.post("/streak", response_model=StreakResponse)
async def habit_streak(request: StreakRequest):
    """Compute streak stats for one habit's log."""
    now = request.now if request.now is not None else datetime.now(get_local_timezone())
    logs = [
        HabitLogEntry(
            completed_at=log.completed_at,
            skipped=log.skipped,
            skip_reason=log.skip_reason,
            note=log.note,
        )
        for log in request.logs
    ]

    info = calculate_streak(logs, now)
    logger.info(f"Streak computed over {len(logs)} log entries: {info.current_streak} day(s)")

    return {
        **info.to_dict(),
        "completed_today": is_completed_today(logs, now),
        "id": request.id,
        "color": request.color,
        "icon": request.icon,
    }
