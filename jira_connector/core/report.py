"""Release report: group closed issues by type label into plain text lines."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from .config import CLOSED_STATUS_CODE
from .converters import type_label_from_code
from .errors import UnmappedValueError
from .models import RemoteIssue

REPORT_COLUMNS = ("key", "status", "type", "description")


def issues_to_dataframe(issues: Iterable[RemoteIssue]) -> pd.DataFrame:
    rows = [
        {
            "key": i.key,
            "status": i.status,
            "type": i.type,
            "description": i.description,
        }
        for i in issues
    ]
    return pd.DataFrame(rows, columns=list(REPORT_COLUMNS))


def build_release_report(
    issues: Iterable[RemoteIssue],
    closed_status_code: str = CLOSED_STATUS_CODE,
) -> list[str]:
    """Render closed issues as report lines grouped by issue type.

    Each group is a ``"** <type label>\\n"`` header, one
    ``"\\t * [KEY] - description"`` line per issue, and a trailing ``"\\n"``.
    Groups and issues keep the order in which they were first seen; issues
    whose status is not ``closed_status_code`` are left out.
    """
    df = issues_to_dataframe(issues)
    if df.empty:
        return []
    closed = df[df["status"] == closed_status_code].copy()
    if closed.empty:
        return []
    # Every closed issue needs a type label to be grouped under
    if closed["type"].isna().any():
        raise UnmappedValueError("type code", None)
    closed["type_label"] = closed["type"].map(type_label_from_code)
    closed["description"] = closed["description"].fillna("")
    lines: list[str] = []
    for label, group in closed.groupby("type_label", sort=False):
        lines.append(f"** {label}\n")
        lines.extend(f"\t * [{key}] - {desc}" for key, desc in zip(group["key"], group["description"]))
        lines.append("\n")
    return lines
