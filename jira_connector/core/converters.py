"""Field converters between local issue enums and remote Jira codes.

Each converter is a lookup table in ``config.py``. Converting an unmapped
value raises ``UnmappedValueError``; nothing is silently defaulted. ``None``
converts to ``None`` so optional issue attributes pass through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from .config import (
    FIELD_IDS,
    PRIORITY_CODES,
    PRIORITY_LABELS,
    STATUS_CODES,
    STATUS_LABELS,
    TYPE_CODES,
    TYPE_LABELS,
)
from .errors import UnmappedValueError
from .models import IssueField, IssuePriority, IssueStatus, IssueType

K = TypeVar("K")
V = TypeVar("V")


def _lookup(table: Mapping[K, V], value: K | None, kind: str) -> V | None:
    if value is None:
        return None
    try:
        return table[value]
    except KeyError:
        raise UnmappedValueError(kind, value) from None


def priority_to_code(priority: IssuePriority | None) -> str | None:
    """Map a local priority to the remote priority id.

    >>> priority_to_code(IssuePriority.HIGH)
    '3'
    """
    return _lookup(PRIORITY_CODES, priority, "priority")


def priority_label_from_code(code: str | None) -> str | None:
    return _lookup(PRIORITY_LABELS, code, "priority code")


def status_to_code(status: IssueStatus | None) -> str | None:
    return _lookup(STATUS_CODES, status, "status")


def status_label_from_code(code: str | None) -> str | None:
    return _lookup(STATUS_LABELS, code, "status code")


def type_to_code(issue_type: IssueType | None) -> str | None:
    return _lookup(TYPE_CODES, issue_type, "type")


def type_label_from_code(code: str | None) -> str | None:
    """Render a remote issue type id as its display label.

    Used by the release report to title each group of issues.

    >>> type_label_from_code("1")
    'Bug'
    """
    return _lookup(TYPE_LABELS, code, "type code")


def field_to_remote_id(issue_field: IssueField) -> str | None:
    """Map an issue field to the Jira field id used in update payloads.

    Returns ``None`` for fields Jira cannot set through a field update
    (currently STATUS); callers skip those entries.
    """
    if issue_field not in FIELD_IDS:
        raise UnmappedValueError("field", issue_field)
    return FIELD_IDS[issue_field]
