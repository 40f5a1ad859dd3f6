"""
Role-based navigation menus.

The caller's role is read from user_roles on every request (see
core.auth.load_user); nothing is cached between requests.
"""

from typing import Dict, List

from placement_portal.schemas.schemas import NavigationItem, UserRole

LOGIN_PATH = "/login"


def _menu(*items) -> List[NavigationItem]:
    return [NavigationItem(label=label, path=path, icon=icon) for label, path, icon in items]


MENUS: Dict[UserRole, List[NavigationItem]] = {
    UserRole.student: _menu(
        ("Dashboard", "/dashboard", "layout-dashboard"),
        ("Resume", "/resume", "file-text"),
        ("Coding Practice", "/coding", "code"),
        ("Tests", "/tests", "clipboard-check"),
        ("Jobs & Placement", "/jobs", "briefcase"),
        ("Attendance", "/attendance", "calendar"),
        ("Analytics", "/analytics", "bar-chart"),
    ),
    UserRole.faculty: _menu(
        ("Dashboard", "/faculty/dashboard", "layout-dashboard"),
        ("Attendance", "/faculty/attendance", "calendar"),
        ("Quizzes", "/faculty/quizzes", "clipboard-check"),
        ("Coding Problems", "/faculty/coding-problems", "code"),
    ),
    UserRole.admin: _menu(
        ("Dashboard", "/admin/dashboard", "layout-dashboard"),
        ("Notifications", "/admin/notifications", "bell"),
    ),
    UserRole.super_admin: _menu(
        ("Dashboard", "/superadmin/dashboard", "layout-dashboard"),
        ("Colleges", "/superadmin/colleges", "building"),
    ),
}


def menu_for_role(role: UserRole) -> List[NavigationItem]:
    """Menu for a role; unknown roles get the student menu."""
    return MENUS.get(role, MENUS[UserRole.student])
