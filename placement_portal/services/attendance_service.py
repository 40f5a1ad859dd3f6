"""
Attendance Service - faculty marking and the student summary.

One row per (student_id, subject, date); marking the same session again
overwrites the status.
"""

import logging
from typing import List

from sqlalchemy import text

from placement_portal.db.postgres import get_db_session
from placement_portal.schemas.schemas import AttendanceMarkRequest, CurrentUser
from placement_portal.services.analytics_service import attendance_summary, get_attendance_records

logger = logging.getLogger(__name__)


def mark_attendance(marker: CurrentUser, request: AttendanceMarkRequest) -> int:
    """Upsert every record of the session; returns the number of rows written."""
    with get_db_session() as db:
        for record in request.records:
            db.execute(
                text("""
                    INSERT INTO attendance (student_id, subject, date, status, marked_by)
                    VALUES (:student_id, :subject, :date, :status, :marked_by)
                    ON CONFLICT (student_id, subject, date)
                    DO UPDATE SET status = EXCLUDED.status,
                                  marked_by = EXCLUDED.marked_by,
                                  updated_at = CURRENT_TIMESTAMP
                """),
                {
                    "student_id": record.student_id,
                    "subject": request.subject.strip(),
                    "date": request.date,
                    "status": record.status.value,
                    "marked_by": marker.user_id,
                }
            )

    logger.info(
        "User %s marked %d attendance records for %s on %s",
        marker.user_id, len(request.records), request.subject, request.date
    )
    return len(request.records)


def my_attendance(user: CurrentUser) -> dict:
    records: List[dict] = get_attendance_records(user)
    return {"records": records, "summary": attendance_summary(records)}
