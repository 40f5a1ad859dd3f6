"""
Analytics Service - read-only aggregates for dashboards.

Everything here is computed per request from query results; nothing is
persisted. The pure helpers at the top carry the arithmetic so the
dashboard functions stay thin.

Attendance status thresholds:
    good    >= 75%
    warning >= 60%
    danger   < 60%
"""

from collections import Counter, OrderedDict
from typing import Dict, Iterable, List, Optional
import logging

from placement_portal.db.postgres import execute_raw_sql
from placement_portal.schemas.schemas import CurrentUser
from placement_portal.services.mongo_service import ResumeAnalyticsService, ResumeVersionService
from placement_portal.services.profile_service import get_completeness

logger = logging.getLogger(__name__)

GOOD_THRESHOLD = 75
WARNING_THRESHOLD = 60

# Statuses that count towards attendance
ATTENDED_STATUSES = {"present", "late"}


# ============================================================
# PURE HELPERS
# ============================================================

def average(values: Iterable) -> Optional[float]:
    """Mean of the non-null values rounded to 2 places; None when there are none."""
    numbers = [float(v) for v in values if v is not None]
    if not numbers:
        return None
    return round(sum(numbers) / len(numbers), 2)


def percentage(part: float, total: float) -> float:
    if not total:
        return 0.0
    return round(100.0 * part / total, 2)


def attendance_status(percent: float) -> str:
    if percent >= GOOD_THRESHOLD:
        return "good"
    if percent >= WARNING_THRESHOLD:
        return "warning"
    return "danger"


def attendance_summary(records: List[dict]) -> dict:
    """
    Attendance rows ({subject, status}) -> overall and per-subject percentages.

    Subjects keep the order in which they first appear.
    """
    per_subject: "OrderedDict[str, List[int]]" = OrderedDict()
    for record in records:
        attended, total = per_subject.setdefault(record["subject"], [0, 0])
        per_subject[record["subject"]] = [
            attended + (1 if record.get("status") in ATTENDED_STATUSES else 0),
            total + 1,
        ]

    subjects = []
    for name, (attended, total) in per_subject.items():
        percent = percentage(attended, total)
        subjects.append({
            "name": name,
            "attended": attended,
            "total": total,
            "percentage": percent,
            "status": attendance_status(percent),
        })

    attended_all = sum(s["attended"] for s in subjects)
    total_all = sum(s["total"] for s in subjects)
    overall = percentage(attended_all, total_all)
    return {
        "overall": overall,
        "status": attendance_status(overall) if total_all else None,
        "subjects": subjects,
    }


def ats_trend(events: List[dict]) -> List[dict]:
    """
    ats_check events -> [{"month": "YYYY-MM", "score": avg}] in month order.
    Events without a score or timestamp are skipped.
    """
    by_month: Dict[str, List[float]] = {}
    for event in events:
        score = (event.get("action_details") or {}).get("score")
        created = event.get("created_at")
        if score is None or not created:
            continue
        month = str(created)[:7]
        by_month.setdefault(month, []).append(score)

    return [{"month": month, "score": average(scores)} for month, scores in sorted(by_month.items())]


def action_counts(events: List[dict]) -> Dict[str, int]:
    return dict(Counter(event.get("action_type") for event in events if event.get("action_type")))


# ============================================================
# DASHBOARDS
# ============================================================

def get_attendance_records(user: CurrentUser) -> List[dict]:
    return execute_raw_sql(
        """
            SELECT subject, date, status FROM attendance
            WHERE student_id = :user_id
            ORDER BY date ASC, subject ASC
        """,
        {"user_id": user.user_id}
    )


def get_quiz_average(user: CurrentUser) -> Optional[float]:
    """Average quiz percentage across attempts."""
    rows = execute_raw_sql(
        """
            SELECT score, total_marks FROM quiz_attempts
            WHERE user_id = :user_id AND total_marks > 0
        """,
        {"user_id": user.user_id}
    )
    return average(percentage(row["score"] or 0, row["total_marks"]) for row in rows)


def resume_analytics(user: CurrentUser) -> dict:
    """Counts by action, average and last ATS score, monthly trend."""
    events = ResumeAnalyticsService().list_for_user(user.user_id)
    ats_events = [e for e in events if e.get("action_type") == "ats_check"]
    scores = [(e.get("action_details") or {}).get("score") for e in ats_events]
    scores = [s for s in scores if s is not None]

    return {
        "actionCounts": action_counts(events),
        "averageAtsScore": average(scores),
        "lastAtsScore": scores[-1] if scores else None,
        "atsTrend": ats_trend(ats_events),
    }


def student_dashboard(user: CurrentUser) -> dict:
    versions = ResumeVersionService()
    completeness = get_completeness(user)

    return {
        "resumeCompletion": completeness["completeness"],
        "canDownloadPdf": completeness["can_download_pdf"],
        "atsScore": versions.latest_ats_score(user.user_id),
        "resumeCount": versions.count_for_user(user.user_id),
        "attendance": attendance_summary(get_attendance_records(user)),
        "quizAverage": get_quiz_average(user),
    }
