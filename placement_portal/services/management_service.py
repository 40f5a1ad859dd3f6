"""
Management Service - the staff menus.

Faculty keep their own quizzes and coding problems (every read and write
is filtered by created_by), admins publish notifications, super admins
keep the college list. Toggle and delete return None / False when the
row is missing or belongs to someone else; routes turn that into a 404.
"""

import logging
from typing import List, Optional

from sqlalchemy import text

from placement_portal.core.errors import RequestValidationFailed
from placement_portal.db.postgres import execute_raw_sql, get_db_session, row_to_dict
from placement_portal.schemas.schemas import (
    CodingProblemForm, CollegeForm, CurrentUser, NotificationForm, QuizForm
)

logger = logging.getLogger(__name__)

QUIZ_COLUMNS = "id, title, description, subject, duration_minutes, total_marks, is_active, created_by, created_at"
PROBLEM_COLUMNS = "id, title, description, difficulty, constraints, tags, is_placement, created_by, created_at"
NOTIFICATION_COLUMNS = "id, title, message, type, is_active, created_by, created_at"
COLLEGE_COLUMNS = "id, name, code, address, city, state, created_at"


def _returning_one(sql: str, params: dict) -> Optional[dict]:
    """Run a write with RETURNING and give back the row, or None when nothing matched."""
    with get_db_session() as db:
        result = db.execute(text(sql), params)
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(list(result.keys()), row)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


# ============================================================
# QUIZZES
# ============================================================

def list_quizzes(user: CurrentUser) -> List[dict]:
    return execute_raw_sql(
        f"SELECT {QUIZ_COLUMNS} FROM quizzes WHERE created_by = :user_id ORDER BY created_at DESC, id DESC",
        {"user_id": user.user_id}
    )


def create_quiz(user: CurrentUser, form: QuizForm) -> dict:
    row = _returning_one(
        f"""
            INSERT INTO quizzes (title, description, subject, duration_minutes, total_marks, created_by)
            VALUES (:title, :description, :subject, :duration_minutes, :total_marks, :created_by)
            RETURNING {QUIZ_COLUMNS}
        """,
        {
            "title": form.title.strip(),
            "description": _blank_to_none(form.description),
            "subject": _blank_to_none(form.subject),
            "duration_minutes": form.duration_minutes,
            "total_marks": form.total_marks,
            "created_by": user.user_id,
        }
    )
    logger.info("User %s created quiz %s", user.user_id, row["id"])
    return row


def toggle_quiz(user: CurrentUser, quiz_id: int) -> Optional[dict]:
    return _returning_one(
        f"""
            UPDATE quizzes SET is_active = NOT is_active
            WHERE id = :id AND created_by = :user_id
            RETURNING {QUIZ_COLUMNS}
        """,
        {"id": quiz_id, "user_id": user.user_id}
    )


def delete_quiz(user: CurrentUser, quiz_id: int) -> bool:
    deleted = _returning_one(
        "DELETE FROM quizzes WHERE id = :id AND created_by = :user_id RETURNING id",
        {"id": quiz_id, "user_id": user.user_id}
    )
    return deleted is not None


# ============================================================
# CODING PROBLEMS
# ============================================================

def list_problems(user: CurrentUser) -> List[dict]:
    return execute_raw_sql(
        f"SELECT {PROBLEM_COLUMNS} FROM coding_problems WHERE created_by = :user_id "
        "ORDER BY created_at DESC, id DESC",
        {"user_id": user.user_id}
    )


def create_problem(user: CurrentUser, form: CodingProblemForm) -> dict:
    row = _returning_one(
        f"""
            INSERT INTO coding_problems (title, description, difficulty, constraints, tags, is_placement, created_by)
            VALUES (:title, :description, :difficulty, :constraints, :tags, :is_placement, :created_by)
            RETURNING {PROBLEM_COLUMNS}
        """,
        {
            "title": form.title.strip(),
            "description": form.description.strip(),
            "difficulty": form.difficulty.value,
            "constraints": _blank_to_none(form.constraints),
            "tags": form.tags,
            "is_placement": form.is_placement,
            "created_by": user.user_id,
        }
    )
    logger.info("User %s created coding problem %s", user.user_id, row["id"])
    return row


def delete_problem(user: CurrentUser, problem_id: int) -> bool:
    deleted = _returning_one(
        "DELETE FROM coding_problems WHERE id = :id AND created_by = :user_id RETURNING id",
        {"id": problem_id, "user_id": user.user_id}
    )
    return deleted is not None


# ============================================================
# NOTIFICATIONS
# ============================================================

def list_notifications() -> List[dict]:
    return execute_raw_sql(
        f"SELECT {NOTIFICATION_COLUMNS} FROM notifications ORDER BY created_at DESC, id DESC"
    )


def create_notification(user: CurrentUser, form: NotificationForm) -> dict:
    row = _returning_one(
        f"""
            INSERT INTO notifications (title, message, type, created_by)
            VALUES (:title, :message, :type, :created_by)
            RETURNING {NOTIFICATION_COLUMNS}
        """,
        {
            "title": form.title.strip(),
            "message": form.message.strip(),
            "type": form.type.value,
            "created_by": user.user_id,
        }
    )
    logger.info("User %s sent notification %s", user.user_id, row["id"])
    return row


def toggle_notification(notification_id: int) -> Optional[dict]:
    return _returning_one(
        f"UPDATE notifications SET is_active = NOT is_active WHERE id = :id RETURNING {NOTIFICATION_COLUMNS}",
        {"id": notification_id}
    )


# ============================================================
# COLLEGES
# ============================================================

def list_colleges() -> List[dict]:
    return execute_raw_sql(f"SELECT {COLLEGE_COLUMNS} FROM colleges ORDER BY created_at DESC, id DESC")


def create_college(form: CollegeForm) -> dict:
    code = form.code.strip()

    with get_db_session() as db:
        taken = db.execute(
            text("SELECT 1 FROM colleges WHERE LOWER(code) = LOWER(:code)"),
            {"code": code}
        ).fetchone()
        if taken:
            raise RequestValidationFailed(f"College code '{code}' already exists")

        result = db.execute(
            text(f"""
                INSERT INTO colleges (name, code, address, city, state)
                VALUES (:name, :code, :address, :city, :state)
                RETURNING {COLLEGE_COLUMNS}
            """),
            {
                "name": form.name.strip(),
                "code": code,
                "address": _blank_to_none(form.address),
                "city": _blank_to_none(form.city),
                "state": _blank_to_none(form.state),
            }
        )
        row = row_to_dict(list(result.keys()), result.fetchone())

    logger.info("Added college %s (%s)", row["id"], code)
    return row


def delete_college(college_id: int) -> bool:
    deleted = _returning_one("DELETE FROM colleges WHERE id = :id RETURNING id", {"id": college_id})
    return deleted is not None


# ============================================================
# STUDENT ROSTER
# ============================================================

def student_roster() -> List[dict]:
    """Students to mark attendance for; a user without a role row counts as a student."""
    return execute_raw_sql("""
        SELECT u.user_id,
               COALESCE(sp.full_name, '') AS full_name,
               COALESCE(sp.email, u.email) AS email
        FROM users u
        LEFT JOIN user_roles ur ON ur.user_id = u.user_id
        LEFT JOIN student_profiles sp ON sp.user_id = u.user_id
        WHERE (ur.role = 'student' OR ur.role IS NULL) AND u.is_active
        ORDER BY sp.full_name ASC NULLS LAST, u.email ASC
    """)
