"""
Campus Placement Portal
Multi-role placement backend (student, faculty, admin, super-admin).

Architecture:
- PostgreSQL: Profile sections, users, roles, attendance
- MongoDB: Resume versions, resume analytics log, GridFS file buckets
- Hosted language model: resume content, ATS scoring, cover letters
"""

__version__ = "1.0.0"
