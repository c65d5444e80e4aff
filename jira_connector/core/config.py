"""Central configuration, remote constants, and converter code tables."""

from __future__ import annotations

from dataclasses import dataclass

from .models import IssueField, IssuePriority, IssueStatus, IssueType

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://jira.example.com"
DEFAULT_PROJECT_KEY = "OBS"
DEFAULT_TIMEOUT: int = 30  # seconds, passed to the HTTP session
SESSION_COOKIE_NAME = "JSESSIONID"

# =============================================================================
# Remote Constants
# These are literal values of the remote Jira configuration, not computed.
# =============================================================================
CLOSED_STATUS_CODE = "6"
SEARCH_MAX_RESULTS: int = 1000

FIX_VERSION_FIELD = "fixVersions"
COMPONENTS_FIELD = "components"

# Component names must not contain this character
COMPONENT_SEPARATOR = ","

# =============================================================================
# Priority Configuration
# Jira default priority ids: 1 Blocker, 2 Critical, 3 Major, 4 Minor, 5 Trivial
# =============================================================================
PRIORITY_CODES: dict[IssuePriority, str] = {
    IssuePriority.IMMEDIATE: "1",
    IssuePriority.URGENT: "2",
    IssuePriority.HIGH: "3",
    IssuePriority.NORMAL: "4",
    IssuePriority.LOW: "5",
}

PRIORITY_LABELS: dict[str, str] = {
    "1": "Blocker",
    "2": "Critical",
    "3": "Major",
    "4": "Minor",
    "5": "Trivial",
}

# =============================================================================
# Workflow Status Configuration
# =============================================================================
STATUS_CODES: dict[IssueStatus, str] = {
    IssueStatus.NEW: "1",
    IssueStatus.UNASSIGNED: "1",
    IssueStatus.ASSIGNED: "3",
    IssueStatus.CLOSED: CLOSED_STATUS_CODE,
}

STATUS_LABELS: dict[str, str] = {
    "1": "Open",
    "3": "In Progress",
    "4": "Reopened",
    "5": "Resolved",
    "6": "Closed",
}

# =============================================================================
# Issue Type Configuration
# =============================================================================
TYPE_CODES: dict[IssueType, str] = {
    IssueType.BUG: "1",
    IssueType.NEW_FEATURE: "2",
    IssueType.TASK: "3",
    IssueType.IMPROVEMENT: "4",
}

TYPE_LABELS: dict[str, str] = {
    "1": "Bug",
    "2": "New Feature",
    "3": "Task",
    "4": "Improvement",
}

# =============================================================================
# Jira Field IDs
# STATUS has no field id: status changes go through workflow transitions.
# =============================================================================
FIELD_IDS: dict[IssueField, str | None] = {
    IssueField.SUMMARY: "summary",
    IssueField.DESCRIPTION: "description",
    IssueField.REPORTER: "reporter",
    IssueField.OWNER: "assignee",
    IssueField.PRIORITY: "priority",
    IssueField.STATUS: None,
    IssueField.DUEVERSION: FIX_VERSION_FIELD,
    IssueField.TYPE: "issuetype",
    IssueField.COMPONENT: COMPONENTS_FIELD,
}


@dataclass(slots=True)
class ConnectorSettings:
    server: str = JIRA_DEFAULT_SERVER
    user: str | None = None
    password: str | None = None
    project_key: str = DEFAULT_PROJECT_KEY
    timeout: int = DEFAULT_TIMEOUT
    # If True, a component or release name that cannot be found raises
    # NotFoundError instead of degrading to an id-less component / a logged no-op.
    strict_lookups: bool = False
    search_max_results: int = SEARCH_MAX_RESULTS
    closed_status_code: str = CLOSED_STATUS_CODE
    session_cookie: str = SESSION_COOKIE_NAME
