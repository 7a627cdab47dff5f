"""
Learning analytics helpers for CourseHub.

Plain functions over the JSON documents stored on ``User`` and ``Course``.
Nothing here touches the database: callers pass copies of the documents in,
and persist whatever comes back.

Timestamps inside documents are ISO-8601 strings in UTC; chart keys are
``YYYY-MM-DD`` calendar dates.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional


def default_analytics() -> Dict[str, Any]:
    """Empty analytics document for a new user."""
    return {
        "total_hours": 0.0,
        "days_studied": 0,
        "last_study_date": None,
        "study_sessions": [],
        "attendance": 0.0,
        "avg_marks": 0.0,
        "daily_hours": 0.0,
        "total_courses": 0,
        "completed_courses": 0,
        "certificates": 0,
        "learning_hours_chart": [],
    }


def default_settings() -> Dict[str, Any]:
    """Default notification, security and appearance preferences."""
    return {
        "notifications": {
            "email_notifications": True,
            "push_notifications": True,
            "course_updates": True,
            "discussion_replies": True,
        },
        "security": {
            "two_factor_auth": False,
            "login_alerts": True,
        },
        "appearance": {
            "theme": "light",
            "language": "en",
        },
    }


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp, treating naive values as UTC."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def calendar_date(value: Any) -> Optional[date]:
    """Calendar date (UTC) of a stored timestamp or date key."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = parse_timestamp(value)
    return parsed.astimezone(timezone.utc).date() if parsed else None


# Purchases

def new_purchase(course_id: int, course_title: str, now: datetime) -> Dict[str, Any]:
    return {
        "course_id": int(course_id),
        "course_title": course_title,
        "purchase_date": now.isoformat(),
        "completed": False,
        "completed_at": None,
        "progress": {
            "completed_lessons": [],
            "current_lesson": None,
        },
    }


def find_purchase(purchases: Iterable[Mapping[str, Any]], course_id: int) -> Optional[int]:
    """Index of the purchase record for ``course_id``, or None."""
    for index, purchase in enumerate(purchases):
        if int(purchase["course_id"]) == int(course_id):
            return index
    return None


def merge_completed_lessons(
    progress: Dict[str, Any],
    lesson_ids: Iterable[str],
    now: datetime
) -> int:
    """
    Append lesson ids not yet recorded as completed.

    Args:
        progress: The purchase's progress document, modified in place
        lesson_ids: Lesson ids reported as completed by the client
        now: Completion timestamp for the new entries

    Returns:
        int: Number of newly recorded completions
    """
    completed = progress.setdefault("completed_lessons", [])
    seen = {entry["lesson_id"] for entry in completed}
    added = 0
    for lesson_id in lesson_ids:
        if lesson_id in seen:
            continue
        seen.add(lesson_id)
        completed.append({"lesson_id": lesson_id, "completed_at": now.isoformat()})
        added += 1
    return added


# Analytics reconciliation

def register_study_day(analytics: Dict[str, Any], now: datetime) -> bool:
    """Count ``now`` as a study day unless one was already counted today."""
    if calendar_date(analytics.get("last_study_date")) == calendar_date(now):
        return False
    analytics["days_studied"] = analytics.get("days_studied", 0) + 1
    analytics["last_study_date"] = now.isoformat()
    return True


def record_study_session(analytics: Dict[str, Any], hours: float, now: datetime) -> None:
    analytics["total_hours"] = analytics.get("total_hours", 0) + hours
    analytics.setdefault("study_sessions", []).append({
        "date": now.isoformat(),
        "hours": hours,
    })


def update_learning_hours_chart(
    chart: Iterable[Mapping[str, Any]],
    today: date,
    hours: float,
    window_days: int = 7
) -> List[Dict[str, Any]]:
    """
    Add ``hours`` to today's chart entry and trim to the rolling window.

    The window covers ``window_days`` calendar days ending today, so the
    result holds at most ``window_days`` entries, one per date, ascending.
    """
    entries: Dict[str, float] = {}
    for entry in chart:
        entries[entry["date"]] = entries.get(entry["date"], 0) + entry["hours"]

    today_key = today.isoformat()
    entries[today_key] = entries.get(today_key, 0) + hours

    cutoff = today - timedelta(days=window_days - 1)
    return [
        {"date": key, "hours": value}
        for key, value in sorted(entries.items(), key=lambda item: date.fromisoformat(item[0]))
        if cutoff <= date.fromisoformat(key) <= today
    ]


def recompute_derived_analytics(
    analytics: Dict[str, Any],
    purchased_count: int,
    attendance_window_days: int = 30
) -> None:
    """Recompute attendance, daily hours and course count from scratch."""
    days = analytics.get("days_studied", 0)
    analytics["attendance"] = min(days / attendance_window_days * 100, 100)
    analytics["daily_hours"] = analytics.get("total_hours", 0) / days if days > 0 else 0
    analytics["total_courses"] = purchased_count


def count_course_lessons(modules: Optional[Iterable[Mapping[str, Any]]]) -> int:
    return sum(len(module.get("lessons") or []) for module in modules or [])


# Streaks

def calculate_learning_streak(session_dates: Iterable[Any], today: date) -> int:
    """
    Count consecutive study days ending today, or yesterday if there is
    no session yet today.

    Args:
        session_dates: Session timestamps or dates, in any order
        today: The reference calendar date

    Returns:
        int: Streak length in days, 0 when neither today nor yesterday
        has a session
    """
    days = {calendar_date(value) for value in session_dates if value is not None}

    if today in days:
        anchor = today
    elif today - timedelta(days=1) in days:
        anchor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while anchor - timedelta(days=streak) in days:
        streak += 1
    return streak


# Watched videos

def build_watched_videos(
    purchases: Iterable[Mapping[str, Any]],
    courses_by_id: Mapping[int, Mapping[str, Any]],
    now: datetime,
    default_progress: int = 50
) -> List[Dict[str, Any]]:
    """
    Project every lesson of every purchased course into a video entry.

    ``courses_by_id`` maps course id to a course document with ``modules``.
    Purchases whose course no longer exists are skipped. The result is
    ordered by ``last_watched``, most recent first, unwatched lessons last.
    """
    videos = []
    for purchase in purchases:
        course = courses_by_id.get(int(purchase["course_id"]))
        if not course:
            continue

        progress = purchase.get("progress") or {}
        completed = {
            entry["lesson_id"]: entry.get("completed_at")
            for entry in progress.get("completed_lessons") or []
        }
        current = progress.get("current_lesson") or {}

        for module in course.get("modules") or []:
            for lesson in module.get("lessons") or []:
                lesson_id = lesson.get("id")
                if lesson_id in completed:
                    percent, status, last_watched = 100, "completed", completed[lesson_id]
                elif current.get("lesson_id") and current.get("lesson_id") == lesson_id:
                    percent = current.get("progress") or default_progress
                    status, last_watched = "in-progress", now.isoformat()
                else:
                    percent, status, last_watched = 0, "not-started", None

                videos.append({
                    "id": lesson_id,
                    "title": lesson.get("title"),
                    "course": purchase.get("course_title"),
                    "course_id": purchase["course_id"],
                    "duration": lesson.get("duration") or "15:00",
                    "progress": percent,
                    "status": status,
                    "last_watched": last_watched,
                    "thumbnail": lesson.get("thumbnail") or f"/course-thumbnails/{purchase['course_id']}.png",
                    "module_title": module.get("title"),
                })

    earliest = datetime.min.replace(tzinfo=timezone.utc)
    videos.sort(key=lambda video: parse_timestamp(video["last_watched"]) or earliest, reverse=True)
    return videos


def summarize_watch_metrics(
    analytics: Mapping[str, Any],
    videos: Iterable[Mapping[str, Any]],
    today: date,
    default_session_minutes: int = 23
) -> Dict[str, Any]:
    daily_hours = analytics.get("daily_hours") or 0
    sessions = analytics.get("study_sessions") or []
    return {
        "total_hours": math.floor((analytics.get("total_hours") or 0) * 10 + 0.5) / 10,
        "videos_completed": sum(1 for video in videos if video["status"] == "completed"),
        # both rounded half-up, not to even
        "avg_session_minutes": math.floor(daily_hours * 60 + 0.5) if daily_hours else default_session_minutes,
        "learning_streak": calculate_learning_streak((s.get("date") for s in sessions), today),
    }


# Course cards

def course_progress_summary(completed_count: int, total_lessons: int) -> Dict[str, Any]:
    """Percentage, status label and lesson counter for a course card."""
    if total_lessons > 0 and completed_count >= total_lessons:
        status = "Completed"
    elif completed_count > 0:
        status = "In Progress"
    else:
        status = "Not Started"

    percent = math.floor(completed_count / total_lessons * 100 + 0.5) if total_lessons > 0 else 0
    return {
        "progress": min(percent, 100),
        "status": status,
        "lessons": f"{completed_count} of {total_lessons} lessons",
    }
