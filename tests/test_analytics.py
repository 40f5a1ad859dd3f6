"""
Tests for dashboard aggregates, attendance and navigation menus.
"""

from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from placement_portal.schemas.schemas import AttendanceMarkRequest, UserRole
from placement_portal.services import analytics_service, attendance_service
from placement_portal.services.analytics_service import (
    action_counts, ats_trend, attendance_status, attendance_summary, average, percentage
)
from placement_portal.services.navigation import LOGIN_PATH, menu_for_role


# ============================================================
# ARITHMETIC
# ============================================================

def test_average():
    assert average([]) is None
    assert average([None, None]) is None
    assert average([70, 80, None, 91]) == 80.33


def test_percentage_of_zero_total():
    assert percentage(3, 0) == 0.0
    assert percentage(1, 3) == 33.33


@pytest.mark.parametrize("percent,status", [
    (100, "good"), (75, "good"), (74.99, "warning"), (60, "warning"), (59.9, "danger"), (0, "danger"),
])
def test_attendance_status_thresholds(percent, status):
    assert attendance_status(percent) == status


def test_attendance_summary_per_subject():
    records = [
        {"subject": "DBMS", "status": "present"},
        {"subject": "OS", "status": "absent"},
        {"subject": "DBMS", "status": "late"},
        {"subject": "OS", "status": "present"},
        {"subject": "DBMS", "status": "absent"},
        {"subject": "DBMS", "status": "present"},
    ]
    summary = attendance_summary(records)

    assert [s["name"] for s in summary["subjects"]] == ["DBMS", "OS"]
    dbms, os_ = summary["subjects"]
    assert (dbms["attended"], dbms["total"], dbms["percentage"], dbms["status"]) == (3, 4, 75.0, "good")
    assert (os_["attended"], os_["total"], os_["percentage"], os_["status"]) == (1, 2, 50.0, "danger")
    assert summary["overall"] == 66.67
    assert summary["status"] == "warning"


def test_attendance_summary_without_records():
    assert attendance_summary([]) == {"overall": 0.0, "status": None, "subjects": []}


def test_ats_trend_by_month():
    events = [
        {"action_details": {"score": 60}, "created_at": datetime(2024, 1, 5)},
        {"action_details": {"score": 80}, "created_at": datetime(2024, 1, 20)},
        {"action_details": {"score": 90}, "created_at": "2024-03-02T10:00:00"},
        {"action_details": {}, "created_at": datetime(2024, 2, 1)},
    ]
    assert ats_trend(events) == [{"month": "2024-01", "score": 70.0}, {"month": "2024-03", "score": 90.0}]


def test_action_counts():
    events = [{"action_type": "generate"}, {"action_type": "ats_check"}, {"action_type": "generate"}, {}]
    assert action_counts(events) == {"generate": 2, "ats_check": 1}


# ============================================================
# DASHBOARDS
# ============================================================

def test_resume_analytics(student):
    events = [
        {"action_type": "generate", "action_details": {"atsScore": 75}, "created_at": datetime(2024, 1, 1)},
        {"action_type": "ats_check", "action_details": {"score": 62}, "created_at": datetime(2024, 1, 2)},
        {"action_type": "ats_check", "action_details": {"score": 81}, "created_at": datetime(2024, 2, 2)},
    ]
    with patch.object(analytics_service, "ResumeAnalyticsService") as cls:
        cls.return_value.list_for_user.return_value = events
        result = analytics_service.resume_analytics(student)

    assert result["actionCounts"] == {"generate": 1, "ats_check": 2}
    assert result["averageAtsScore"] == 71.5
    assert result["lastAtsScore"] == 81
    assert result["atsTrend"] == [{"month": "2024-01", "score": 62.0}, {"month": "2024-02", "score": 81.0}]


def test_student_dashboard(student):
    attendance_rows = [{"subject": "OS", "status": "present"}]
    quiz_rows = [{"score": 8, "total_marks": 10}, {"score": 6, "total_marks": 10}]

    with patch.object(analytics_service, "ResumeVersionService") as versions, \
         patch.object(analytics_service, "get_completeness",
                      return_value={"completeness": 100, "can_download_pdf": True}), \
         patch.object(analytics_service, "execute_raw_sql", side_effect=[attendance_rows, quiz_rows]):
        versions.return_value.latest_ats_score.return_value = 88
        versions.return_value.count_for_user.return_value = 3
        result = analytics_service.student_dashboard(student)

    assert result["resumeCompletion"] == 100
    assert result["canDownloadPdf"] is True
    assert result["atsScore"] == 88
    assert result["resumeCount"] == 3
    assert result["attendance"]["overall"] == 100.0
    assert result["quizAverage"] == 70.0


# ============================================================
# ATTENDANCE
# ============================================================

def test_my_attendance(student):
    rows = [{"subject": "OS", "date": "2024-01-01", "status": "absent"}]
    with patch.object(attendance_service, "get_attendance_records", return_value=rows):
        result = attendance_service.my_attendance(student)
    assert result["records"] == rows
    assert result["summary"]["subjects"][0]["status"] == "danger"


def test_mark_attendance_upserts_each_record(faculty):
    request = AttendanceMarkRequest(
        subject=" DBMS ", date=date(2024, 3, 1),
        records=[{"student_id": 7}, {"student_id": 8, "status": "absent"}],
    )
    session = MagicMock()
    cm = MagicMock()
    cm.__enter__.return_value = session

    with patch.object(attendance_service, "get_db_session", return_value=cm):
        assert attendance_service.mark_attendance(faculty, request) == 2

    sql = str(session.execute.call_args_list[0][0][0])
    assert "ON CONFLICT (student_id, subject, date)" in sql
    params = [c[0][1] for c in session.execute.call_args_list]
    assert [(p["student_id"], p["status"], p["subject"], p["marked_by"]) for p in params] == [
        (7, "present", "DBMS", 3), (8, "absent", "DBMS", 3)
    ]


# ============================================================
# NAVIGATION
# ============================================================

@pytest.mark.parametrize("role,count,first_path", [
    (UserRole.student, 7, "/dashboard"),
    (UserRole.faculty, 4, "/faculty/dashboard"),
    (UserRole.admin, 2, "/admin/dashboard"),
    (UserRole.super_admin, 2, "/superadmin/dashboard"),
])
def test_menu_for_role(role, count, first_path):
    menu = menu_for_role(role)
    assert len(menu) == count
    assert menu[0].path == first_path


def test_student_menu_labels():
    assert [item.label for item in menu_for_role(UserRole.student)] == [
        "Dashboard", "Resume", "Coding Practice", "Tests", "Jobs & Placement", "Attendance", "Analytics"
    ]


def test_login_path():
    assert LOGIN_PATH == "/login"
