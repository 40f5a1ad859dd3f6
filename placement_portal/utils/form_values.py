"""
Form value helpers shared by request schemas and the section editors.

Month pickers send "YYYY-MM"; the store keeps a full date pinned to the
first of the month ("YYYY-MM-01"). List fields may arrive as a
comma-separated string.
"""

import re
from datetime import date, datetime
from typing import Any, List, Optional

# Whole input: "YYYY-MM" or "YYYY-MM-DD", nothing after it
MONTH_RE = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?$")

# Stored values may carry a time part ("2024-05-01T00:00:00")
STORED_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})")


def parse_month(value: str) -> date:
    """'2024-05' or '2024-05-17' -> date(2024, 5, 1); ValueError for anything else."""
    match = MONTH_RE.match(value)
    if not match:
        raise ValueError(f"Expected a YYYY-MM month, got '{value}'")
    year, month, day = match.groups()
    try:
        datetime.strptime(f"{year}-{month}-{day or '01'}", "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"'{value}' is not a valid calendar month")
    return date(int(year), int(month), 1)


def to_storage_month(value: Any) -> Optional[str]:
    """'2024-05' -> '2024-05-01'. Empty values become None."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-01")
    value = str(value).strip()
    if not value:
        return None
    return parse_month(value).isoformat()


def to_form_month(value: Any) -> Optional[str]:
    """'2024-05-01' (or a date) -> '2024-05' for a month input."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m")
    value = str(value).strip()
    if not value:
        return None
    match = STORED_MONTH_RE.match(value)
    if not match:
        return value
    return f"{match.group(1)}-{match.group(2)}"


def split_list_input(value: Any) -> List[str]:
    """Accept a list or a comma-separated string; drop blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]
