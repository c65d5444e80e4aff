"""Translate local issues and change sets into remote Jira records and payloads."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .config import COMPONENT_SEPARATOR, COMPONENTS_FIELD, FIX_VERSION_FIELD
from .converters import field_to_remote_id, priority_to_code, status_to_code, type_to_code
from .errors import NotFoundError
from .models import (
    Issue,
    IssueChanges,
    RemoteComponent,
    RemoteFieldValue,
    RemoteIssue,
    RemoteVersion,
)

logger = logging.getLogger(__name__)

# Fields whose REST value is a reference object keyed by id / name
_ID_REFERENCE_FIELDS = {"priority", "issuetype"}
_NAME_REFERENCE_FIELDS = {"assignee", "reporter"}
_ID_LIST_FIELDS = {COMPONENTS_FIELD, FIX_VERSION_FIELD}


def _is_integer(token: str) -> bool:
    try:
        int(token)
    except (TypeError, ValueError):
        return False
    return True


def resolve_component(
    token: str,
    known_components: Sequence[RemoteComponent],
    *,
    strict: bool = False,
) -> RemoteComponent:
    """Resolve a component name or numeric id to a remote component.

    Numeric tokens are used as ids directly, with no existence check. Other
    tokens must match a known component name exactly. An unmatched name yields
    a component without id, or raises ``NotFoundError`` when ``strict``.
    """
    if _is_integer(token):
        return RemoteComponent(id=token)
    for comp in known_components:
        if comp.name == token:
            return RemoteComponent(id=comp.id, name=comp.name)
    if strict:
        raise NotFoundError("Component", token)
    logger.warning("Component %r not found in project; sending it without id", token)
    return RemoteComponent(name=token)


def split_component_tokens(value: str) -> list[str]:
    return value.split(COMPONENT_SEPARATOR)


def build_remote_issue(
    issue: Issue,
    project_key: str,
    known_components: Sequence[RemoteComponent] = (),
    *,
    strict: bool = False,
) -> RemoteIssue:
    """Build the remote representation of a local issue.

    Scalar fields are copied verbatim; priority, status and type go through
    the field converters. The issue's own project key wins over the
    configured one when set.
    """
    remote = RemoteIssue(
        project=issue.project_key or project_key,
        summary=issue.summary,
        description=issue.description,
        reporter=issue.reporter,
        assignee=issue.owner,
        priority=priority_to_code(issue.priority),
        status=status_to_code(issue.status),
        type=type_to_code(issue.type),
    )
    if issue.components:
        remote.components = [
            resolve_component(c, known_components, strict=strict) for c in issue.components
        ]
    if issue.due_version is not None:
        remote.fix_versions = [RemoteVersion(id=issue.due_version)]
    return remote


def build_field_changes(
    changes: IssueChanges,
    known_components: Sequence[RemoteComponent] = (),
    *,
    strict: bool = False,
) -> list[RemoteFieldValue]:
    """Convert a change set into remote field values.

    Entries whose field has no remote id, or whose value is ``None``, are
    skipped. Component values may list several comma separated tokens.
    """
    out: list[RemoteFieldValue] = []
    for attribute, value in changes.items():
        target = field_to_remote_id(attribute)
        if target is None or value is None:
            continue
        if target == COMPONENTS_FIELD:
            tokens = split_component_tokens(value)
            comps = [resolve_component(t, known_components, strict=strict) for t in tokens]
            out.append(RemoteFieldValue(id=target, values=[c.id for c in comps], components=comps))
        else:
            out.append(RemoteFieldValue(id=target, values=[value]))
    return out


# ------------------ REST payloads ------------------
def _reference(kind: str, value: str | None) -> dict[str, str] | None:
    if value is None:
        return None
    return {kind: value}


def remote_issue_fields(remote: RemoteIssue) -> dict[str, Any]:
    """REST ``fields`` payload for creating ``remote``.

    Status is omitted: Jira creates issues in the workflow's initial status and
    rejects a status field on create.
    """
    out: dict[str, Any] = {
        "project": {"key": remote.project},
        "summary": remote.summary,
        "issuetype": _reference("id", remote.type),
    }
    if remote.description is not None:
        out["description"] = remote.description
    if remote.priority is not None:
        out["priority"] = _reference("id", remote.priority)
    if remote.reporter is not None:
        out["reporter"] = _reference("name", remote.reporter)
    if remote.assignee is not None:
        out["assignee"] = _reference("name", remote.assignee)
    if remote.components:
        out[COMPONENTS_FIELD] = [_component_payload(c) for c in remote.components]
    if remote.fix_versions:
        out[FIX_VERSION_FIELD] = [{"id": v.id} for v in remote.fix_versions]
    return out


def _component_payload(comp: RemoteComponent) -> dict[str, str | None]:
    if comp.id is not None:
        return {"id": comp.id}
    return {"name": comp.name}


def field_changes_payload(values: Iterable[RemoteFieldValue]) -> dict[str, Any]:
    """REST ``fields`` payload for an issue update."""
    out: dict[str, Any] = {}
    for rfv in values:
        if rfv.components:
            out[rfv.id] = [_component_payload(c) for c in rfv.components]
        elif rfv.id in _ID_LIST_FIELDS:
            out[rfv.id] = [{"id": v} for v in rfv.values]
        elif rfv.id in _ID_REFERENCE_FIELDS:
            out[rfv.id] = _reference("id", rfv.values[0] if rfv.values else None)
        elif rfv.id in _NAME_REFERENCE_FIELDS:
            out[rfv.id] = _reference("name", rfv.values[0] if rfv.values else None)
        else:
            out[rfv.id] = rfv.values[0] if rfv.values else None
    return out


# ------------------ Reading jira resources ------------------
def _attr(obj: Any, name: str) -> Any:
    return getattr(obj, name, None) if obj is not None else None


def remote_component_from_resource(resource: Any) -> RemoteComponent:
    return RemoteComponent(id=_attr(resource, "id"), name=_attr(resource, "name"))


def remote_version_from_resource(resource: Any) -> RemoteVersion:
    return RemoteVersion(
        id=_attr(resource, "id"),
        name=_attr(resource, "name"),
        released=bool(_attr(resource, "released")),
    )


def remote_issue_from_resource(resource: Any) -> RemoteIssue:
    """Map a ``jira.Issue`` (or any object with the same shape) to a RemoteIssue."""
    fields = _attr(resource, "fields")
    project = _attr(fields, "project")
    return RemoteIssue(
        key=_attr(resource, "key"),
        project=_attr(project, "key"),
        summary=_attr(fields, "summary"),
        description=_attr(fields, "description"),
        reporter=_attr(_attr(fields, "reporter"), "name"),
        assignee=_attr(_attr(fields, "assignee"), "name"),
        priority=_attr(_attr(fields, "priority"), "id"),
        status=_attr(_attr(fields, "status"), "id"),
        type=_attr(_attr(fields, "issuetype"), "id"),
        components=[remote_component_from_resource(c) for c in (_attr(fields, "components") or [])],
        fix_versions=[remote_version_from_resource(v) for v in (_attr(fields, "fixVersions") or [])],
    )
