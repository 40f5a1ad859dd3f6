"""
Section Editors - one generic editor for every profile sub-entity.

Each section (education, projects, skills, certifications, achievements,
extracurricular, hobbies) is a flat table keyed by user_id with a manual
display_order. The editor:
1. Lists rows ordered by display_order
2. Seeds an edit form from a row (YYYY-MM-01 -> YYYY-MM)
3. Inserts with the next display_order or updates by id
4. Deletes by id

All statements are scoped to the caller's user_id. Store errors propagate
unchanged; nothing is retried.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Type
import logging

from pydantic import BaseModel
from sqlalchemy import text

from placement_portal.db.postgres import get_db_session, execute_raw_sql, row_to_dict
from placement_portal.schemas.schemas import (
    SectionName, EducationForm, ProjectForm, SkillForm, CertificationForm,
    AchievementForm, ExtracurricularForm, HobbyForm, HobbyEntry, CurrentUser
)
from placement_portal.utils.form_values import to_storage_month, to_form_month, split_list_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionSpec:
    name: str
    table: str
    label: str
    form: Type[BaseModel]
    month_fields: Tuple[str, ...] = ()
    list_fields: Tuple[str, ...] = ()
    # (flag, field): field is cleared while the flag is set
    current_flag: Optional[Tuple[str, str]] = None

    @property
    def columns(self) -> List[str]:
        return list(self.form.model_fields.keys())


SECTIONS: Dict[str, SectionSpec] = {
    spec.name: spec for spec in (
        SectionSpec(
            name=SectionName.education.value, table="student_education", label="Education",
            form=EducationForm, month_fields=("start_date", "end_date"),
            current_flag=("is_current", "end_date"),
        ),
        SectionSpec(
            name=SectionName.projects.value, table="student_projects", label="Project",
            form=ProjectForm, month_fields=("duration_start", "duration_end"),
            list_fields=("technologies_used",),
        ),
        SectionSpec(
            name=SectionName.skills.value, table="student_skills", label="Skill",
            form=SkillForm, list_fields=("skills",),
        ),
        SectionSpec(
            name=SectionName.certifications.value, table="student_certifications", label="Certification",
            form=CertificationForm, month_fields=("date_issued",),
        ),
        SectionSpec(
            name=SectionName.achievements.value, table="student_achievements", label="Achievement",
            form=AchievementForm, month_fields=("achievement_date",),
        ),
        SectionSpec(
            name=SectionName.extracurricular.value, table="student_extracurricular", label="Activity",
            form=ExtracurricularForm, month_fields=("duration_start", "duration_end"),
        ),
        SectionSpec(
            name=SectionName.hobbies.value, table="hobbies", label="Hobby",
            form=HobbyForm,
        ),
    )
}


class SectionRowNotFound(LookupError):
    pass


# ============================================================
# FORM <-> ROW TRANSFORMS
# ============================================================

def normalize_form(spec: SectionSpec, form: dict) -> dict:
    """Form values -> storable column values."""
    values = {col: form.get(col) for col in spec.columns}

    for field in spec.month_fields:
        values[field] = to_storage_month(values.get(field))

    for field in spec.list_fields:
        values[field] = split_list_input(values.get(field))

    if spec.current_flag:
        flag, cleared = spec.current_flag
        if values.get(flag):
            values[cleared] = None

    return values


def to_edit_form(spec: SectionSpec, row: dict) -> dict:
    """Stored row -> values for seeding the edit form."""
    form = {"id": row.get("id")}
    for col in spec.columns:
        value = row.get(col)
        if col in spec.month_fields:
            value = to_form_month(value)
        elif col in spec.list_fields:
            value = list(value or [])
        form[col] = value
    return form


# ============================================================
# SECTION SERVICE
# ============================================================

class SectionService:
    """CRUD for one section table, always filtered by user_id."""

    def __init__(self, spec: SectionSpec):
        self.spec = spec

    def _select_columns(self) -> str:
        return ", ".join(["id"] + self.spec.columns + ["display_order"])

    def list_rows(self, user: CurrentUser, limit: Optional[int] = None) -> List[dict]:
        sql = f"""
            SELECT {self._select_columns()} FROM {self.spec.table}
            WHERE user_id = :user_id
            ORDER BY display_order ASC, id ASC
        """
        params = {"user_id": user.user_id}
        if limit is not None:
            sql += " LIMIT :limit"
            params["limit"] = limit
        return execute_raw_sql(sql, params)

    def get_row(self, user: CurrentUser, row_id: int) -> dict:
        rows = execute_raw_sql(
            f"SELECT {self._select_columns()} FROM {self.spec.table} WHERE id = :id AND user_id = :user_id",
            {"id": row_id, "user_id": user.user_id}
        )
        if not rows:
            raise SectionRowNotFound(f"{self.spec.label} {row_id} not found")
        return rows[0]

    def edit_form(self, user: CurrentUser, row_id: int) -> dict:
        return to_edit_form(self.spec, self.get_row(user, row_id))

    def create(self, user: CurrentUser, form: dict) -> dict:
        values = normalize_form(self.spec, form)
        columns = self.spec.columns

        with get_db_session() as db:
            count = db.execute(
                text(f"SELECT COUNT(*) FROM {self.spec.table} WHERE user_id = :user_id"),
                {"user_id": user.user_id}
            ).fetchone()[0]

            placeholders = ", ".join(f":{col}" for col in columns)
            result = db.execute(
                text(f"""
                    INSERT INTO {self.spec.table} (user_id, {", ".join(columns)}, display_order)
                    VALUES (:user_id, {placeholders}, :display_order)
                    RETURNING {self._select_columns()}
                """),
                {**values, "user_id": user.user_id, "display_order": count}
            )
            row = row_to_dict(list(result.keys()), result.fetchone())

        logger.info("Created %s %s for user %s", self.spec.name, row.get("id"), user.user_id)
        return row

    def update(self, user: CurrentUser, row_id: int, form: dict) -> dict:
        values = normalize_form(self.spec, form)
        assignments = ", ".join(f"{col} = :{col}" for col in self.spec.columns)

        with get_db_session() as db:
            result = db.execute(
                text(f"""
                    UPDATE {self.spec.table}
                    SET {assignments}, updated_at = CURRENT_TIMESTAMP
                    WHERE id = :id AND user_id = :user_id
                    RETURNING {self._select_columns()}
                """),
                {**values, "id": row_id, "user_id": user.user_id}
            )
            row = result.fetchone()
            if row is None:
                raise SectionRowNotFound(f"{self.spec.label} {row_id} not found")
            return row_to_dict(list(result.keys()), row)

    def delete(self, user: CurrentUser, row_id: int) -> None:
        with get_db_session() as db:
            result = db.execute(
                text(f"DELETE FROM {self.spec.table} WHERE id = :id AND user_id = :user_id"),
                {"id": row_id, "user_id": user.user_id}
            )
            if result.rowcount == 0:
                raise SectionRowNotFound(f"{self.spec.label} {row_id} not found")


def replace_hobbies(user: CurrentUser, entries: List[HobbyEntry]) -> List[dict]:
    """
    Bulk hobbies editor: drop blank names, delete every existing hobby,
    insert the rest with display_order = position.
    """
    valid = [entry for entry in entries if entry.hobby_name.strip()]
    rows = []

    with get_db_session() as db:
        db.execute(text("DELETE FROM hobbies WHERE user_id = :user_id"), {"user_id": user.user_id})
        for index, entry in enumerate(valid):
            result = db.execute(
                text("""
                    INSERT INTO hobbies (user_id, hobby_name, description, display_order)
                    VALUES (:user_id, :hobby_name, :description, :display_order)
                    RETURNING id, hobby_name, description, display_order
                """),
                {
                    "user_id": user.user_id,
                    "hobby_name": entry.hobby_name.strip(),
                    "description": entry.description,
                    "display_order": index,
                }
            )
            rows.append(row_to_dict(list(result.keys()), result.fetchone()))

    return rows


def get_section_service(name: str) -> SectionService:
    """Get the editor for a section name (KeyError for unknown names)."""
    return SectionService(SECTIONS[name])
