"""Time-based analysis of usage patterns."""

from datetime import tzinfo
from typing import Optional

from .metrics import WEEKDAYS, first_max_index, round_half_up, weekday_index
from .models import Dataset, Timeline
from .parser import to_local

# Share of weekend activity that makes a weekend warrior
WEEKEND_WARRIOR_SHARE = 0.40
LATE_NIGHT_END_HOUR = 5


def build_timeline(dataset: Dataset, tz: Optional[tzinfo] = None) -> Timeline:
    """Build the calendar view of user activity.

    Args:
        dataset: Aggregated entries. Only user entries count as activity.
        tz: Zone for bucketing. None means local time.
    """
    hourly_heatmap = [0] * 24
    daily_activity = {}
    weekday_totals = [0] * 7
    monthly_trend = [0] * 12

    first_activity = ""
    last_activity = ""
    late_night_count = 0

    for entry in dataset.user_entries:
        moment = to_local(entry, tz)
        date_str = moment.date().isoformat()

        hourly_heatmap[moment.hour] += 1
        daily_activity[date_str] = daily_activity.get(date_str, 0) + 1
        weekday_totals[weekday_index(moment)] += 1
        monthly_trend[moment.month - 1] += 1

        if not first_activity or date_str < first_activity:
            first_activity = date_str
        if not last_activity or date_str > last_activity:
            last_activity = date_str

        if moment.hour < LATE_NIGHT_END_HOUR:
            late_night_count += 1

    total = sum(weekday_totals)
    weekend = weekday_totals[0] + weekday_totals[6]
    weekend_share = weekend / total if total else 0.0

    return Timeline(
        hourly_heatmap=hourly_heatmap,
        daily_activity=daily_activity,
        weekday_totals=weekday_totals,
        monthly_trend=monthly_trend,
        peak_hour=first_max_index(hourly_heatmap),
        peak_day=WEEKDAYS[first_max_index(weekday_totals)],
        late_night_count=late_night_count,
        weekend_warrior=weekend_share > WEEKEND_WARRIOR_SHARE,
        weekend_percent=weekend_share * 100,
        first_activity=first_activity or "Unknown",
        last_activity=last_activity or "Unknown",
    )


def format_hour(hour: int) -> str:
    """Format an hour for display, e.g. "2pm", "11am"."""
    if hour == 0:
        return "12am"
    if hour == 12:
        return "12pm"
    if hour < 12:
        return f"{hour}am"
    return f"{hour - 12}pm"


def get_time_of_day(hour: int) -> str:
    if 5 <= hour < 9:
        return "early morning"
    if 9 <= hour < 12:
        return "morning"
    if 12 <= hour < 14:
        return "lunch time"
    if 14 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    if hour >= 21 or hour < 1:
        return "night"
    return "late night"


def get_streak_info(timeline: Timeline) -> dict:
    """Active day count and average prompts per active day."""
    active_days = len(timeline.daily_activity)
    total_prompts = sum(timeline.daily_activity.values())

    return {
        "total_active_days": active_days,
        "average_per_day": round_half_up(total_prompts / active_days) if active_days else 0,
    }
