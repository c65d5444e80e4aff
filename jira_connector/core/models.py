"""Domain data models: local issue records, remote Jira records, and session state."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jira import JIRA

    from .jira_client import JiraSession

logger = logging.getLogger(__name__)


class IssuePriority(Enum):
    IMMEDIATE = "IMMEDIATE"
    URGENT = "URGENT"
    HIGH = "HIGH"
    NORMAL = "NORMAL"
    LOW = "LOW"


class IssueStatus(Enum):
    NEW = "NEW"
    UNASSIGNED = "UNASSIGNED"
    ASSIGNED = "ASSIGNED"
    CLOSED = "CLOSED"


class IssueType(Enum):
    BUG = "BUG"
    NEW_FEATURE = "NEW_FEATURE"
    TASK = "TASK"
    IMPROVEMENT = "IMPROVEMENT"


class IssueField(Enum):
    SUMMARY = "SUMMARY"
    DESCRIPTION = "DESCRIPTION"
    REPORTER = "REPORTER"
    OWNER = "OWNER"
    PRIORITY = "PRIORITY"
    STATUS = "STATUS"
    DUEVERSION = "DUEVERSION"
    TYPE = "TYPE"
    COMPONENT = "COMPONENT"


class ConnectorState(Enum):
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    ONLINE = "ONLINE"


# Change set consumed by an update call: field -> new raw value
IssueChanges = Mapping[IssueField, str | None]


@dataclass(slots=True)
class Issue:
    summary: str | None = None
    description: str | None = None
    reporter: str | None = None
    owner: str | None = None
    priority: IssuePriority | None = None
    status: IssueStatus | None = None
    type: IssueType | None = None
    due_version: str | None = None
    project_key: str | None = None
    components: list[str] = field(default_factory=list)


# ------------------ Remote records ------------------
@dataclass(slots=True)
class RemoteComponent:
    id: str | None = None
    name: str | None = None


@dataclass(slots=True)
class RemoteVersion:
    id: str | None = None
    name: str | None = None
    released: bool = False


@dataclass(slots=True)
class RemoteComment:
    body: str


@dataclass(slots=True)
class RemoteFieldValue:
    id: str
    values: list[str | None] = field(default_factory=list)
    # Resolved components behind ``values`` for the components field; an entry
    # without id is sent by name
    components: list[RemoteComponent] = field(default_factory=list)


@dataclass(slots=True)
class RemoteIssue:
    key: str | None = None
    project: str | None = None
    summary: str | None = None
    description: str | None = None
    reporter: str | None = None
    assignee: str | None = None
    priority: str | None = None
    status: str | None = None
    type: str | None = None
    components: list[RemoteComponent] = field(default_factory=list)
    fix_versions: list[RemoteVersion] = field(default_factory=list)


# ------------------ Session state ------------------
@dataclass(slots=True)
class SessionContext:
    """State of a single connector call.

    Each facade operation opens its own context, so the authentication token
    and liveness state never leak from one call into the next. ``transitions``
    records every state the context passed through, starting from
    DISCONNECTED.
    """

    project_key: str
    session: JiraSession | None = None
    state: ConnectorState = ConnectorState.DISCONNECTED
    transitions: list[ConnectorState] = field(default_factory=lambda: [ConnectorState.DISCONNECTED])

    def transition(self, state: ConnectorState) -> None:
        logger.debug("Connector state %s -> %s", self.state.value, state.value)
        self.state = state
        self.transitions.append(state)

    @property
    def token(self) -> str | None:
        if self.session is None:
            return None
        return self.session.get_authentication_token()

    @property
    def remote(self) -> JIRA | None:
        if self.session is None:
            return None
        return self.session.get_remote_service()
