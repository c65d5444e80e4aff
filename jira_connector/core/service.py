"""JiraIssueService: issue-domain operations over a per-call Jira session."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from jira import JIRA, JIRAError
from requests import RequestException

from .config import FIX_VERSION_FIELD, ConnectorSettings
from .errors import ConnectionFailedError, ExecutionError, NotFoundError
from .jira_client import JiraSession
from .mappers import (
    build_field_changes,
    build_remote_issue,
    field_changes_payload,
    remote_component_from_resource,
    remote_issue_fields,
    remote_issue_from_resource,
    remote_version_from_resource,
)
from .models import (
    ConnectorState,
    Issue,
    IssueChanges,
    IssueField,
    RemoteComment,
    RemoteComponent,
    RemoteFieldValue,
    RemoteVersion,
    SessionContext,
)
from .report import build_release_report

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (JIRAError, RequestException)
SessionFactory = Callable[[], JiraSession]


class JiraIssueService:
    """Issue-domain facade for a single Jira project.

    Every operation logs in, performs its remote call(s) and logs out again;
    no session or token survives between calls. ``state`` reports the
    liveness of the call in flight, or of the last call once it finished
    (always DISCONNECTED then).
    """

    def __init__(self, settings: ConnectorSettings, *, session_factory: SessionFactory | None = None):
        self.settings = settings
        self.session_factory = session_factory or self._default_session
        self.last_context: SessionContext | None = None

    def _default_session(self) -> JiraSession:
        return JiraSession(
            self.settings.server,
            timeout=self.settings.timeout,
            cookie_name=self.settings.session_cookie,
        )

    # ------------------ Configuration ------------------
    @property
    def user(self) -> str | None:
        return self.settings.user

    @user.setter
    def user(self, value: str | None) -> None:
        self.settings.user = value

    @property
    def password(self) -> str | None:
        return self.settings.password

    @password.setter
    def password(self, value: str | None) -> None:
        self.settings.password = value

    @property
    def project_key(self) -> str:
        return self.settings.project_key

    @project_key.setter
    def project_key(self, value: str) -> None:
        self.settings.project_key = value

    @property
    def state(self) -> ConnectorState:
        if self.last_context is None:
            return ConnectorState.DISCONNECTED
        return self.last_context.state

    def get_state(self) -> ConnectorState:
        return self.state

    # ------------------ Session handling ------------------
    @contextmanager
    def _connected(self) -> Iterator[SessionContext]:
        context = SessionContext(project_key=self.settings.project_key)
        self.last_context = context
        session = self.session_factory()
        context.transition(ConnectorState.CONNECTING)
        try:
            try:
                session.connect(self.settings.user, self.settings.password)
            except ConnectionFailedError as exc:
                logger.error("Could not log in to %s as %s: %s", self.settings.server, self.user, exc)
                raise ExecutionError(
                    "Could not connect to server, maybe wrong user password/username", exc
                ) from exc
            context.session = session
            context.transition(ConnectorState.ONLINE)
            yield context
        finally:
            try:
                session.disconnect()
            finally:
                context.session = None
                context.transition(ConnectorState.DISCONNECTED)

    def _components(self, remote: JIRA, project_key: str) -> list[RemoteComponent]:
        return [remote_component_from_resource(c) for c in remote.project_components(project_key)]

    def _find_version(
        self, remote: JIRA, project_key: str, match: Callable[[RemoteVersion], bool]
    ) -> tuple[RemoteVersion, Any] | None:
        found = None
        for resource in remote.project_versions(project_key):
            version = remote_version_from_resource(resource)
            if match(version):
                found = (version, resource)
        return found

    # ------------------ Issue operations ------------------
    def create_issue(self, issue: Issue) -> str:
        """Create ``issue`` in Jira and return the key Jira assigned to it."""
        try:
            with self._connected() as ctx:
                remote = ctx.remote
                project_key = issue.project_key or ctx.project_key
                known = self._components(remote, project_key) if issue.components else []
                remote_issue = build_remote_issue(
                    issue, project_key, known, strict=self.settings.strict_lookups
                )
                created = remote.create_issue(fields=remote_issue_fields(remote_issue))
        except REMOTE_ERRORS as exc:
            logger.error("Error creating issue %r. Remote call failed: %s", issue.summary, exc)
            raise ExecutionError("Remote call failed", exc) from exc
        logger.info("Successfully created issue %s", created.key)
        return created.key

    def add_comment(self, issue_key: str, comment: str) -> None:
        try:
            with self._connected() as ctx:
                remote_comment = RemoteComment(body=comment)
                ctx.remote.add_comment(issue_key, remote_comment.body)
        except REMOTE_ERRORS as exc:
            logger.error("Error commenting issue %s. Remote call failed: %s", issue_key, exc)
            raise ExecutionError("Remote call failed", exc) from exc

    def update_issue(self, issue_key: str, comment: str | None, changes: IssueChanges) -> None:
        """Apply ``changes`` to an issue.

        ``comment`` is accepted for the issue-domain signature only; Jira's
        field update has no place for it.
        """
        try:
            with self._connected() as ctx:
                remote = ctx.remote
                known = self._components(remote, ctx.project_key) if IssueField.COMPONENT in changes else []
                values = build_field_changes(changes, known, strict=self.settings.strict_lookups)
                if not values:
                    logger.debug("No updatable fields for %s, skipping update", issue_key)
                    return
                remote.issue(issue_key, fields="summary").update(fields=field_changes_payload(values))
        except REMOTE_ERRORS as exc:
            logger.error("Error updating issue %s. Remote call failed: %s", issue_key, exc)
            raise ExecutionError("Remote call failed", exc) from exc

    # ------------------ Release operations ------------------
    def move_issues_from_release_to_release(self, release_from_id: str, release_to_id: str) -> None:
        try:
            with self._connected() as ctx:
                remote = ctx.remote
                found = self._find_version(remote, ctx.project_key, lambda v: v.id == release_to_id)
                if found is None:
                    logger.error("Target release %s not found in project %s", release_to_id, ctx.project_key)
                    raise NotFoundError("Release", release_to_id)
                target, _ = found
                payload = field_changes_payload([RemoteFieldValue(id=FIX_VERSION_FIELD, values=[target.id])])
                jql = f'fixVersion in ("{release_from_id}") '
                issues = remote.search_issues(jql, maxResults=self.settings.search_max_results)
                for issue in issues:
                    issue.update(fields=payload)
                logger.info("Moved %d issues to release %s", len(issues), target.name)
        except REMOTE_ERRORS as exc:
            logger.error(
                "Error moving issues from release %s to %s. Remote call failed: %s",
                release_from_id,
                release_to_id,
                exc,
            )
            raise ExecutionError("Remote call failed", exc) from exc

    def close_release(self, release_name: str) -> None:
        """Mark the project version named ``release_name`` as released.

        A missing version is logged and ignored, unless ``strict_lookups`` is
        set, in which case ``NotFoundError`` is raised.
        """
        try:
            with self._connected() as ctx:
                found = self._find_version(ctx.remote, ctx.project_key, lambda v: v.name == release_name)
                if found is None:
                    logger.error("Release %r not found in project %s", release_name, ctx.project_key)
                    if self.settings.strict_lookups:
                        raise NotFoundError("Release", release_name)
                    return
                _, resource = found
                resource.update(released=True)
        except REMOTE_ERRORS as exc:
            logger.error("Error closing release %r. Remote call failed: %s", release_name, exc)
            raise ExecutionError("Remote call failed", exc) from exc

    def generate_release_report(self, release_id: str) -> list[str]:
        closed = self.settings.closed_status_code
        try:
            with self._connected() as ctx:
                jql = f'fixVersion in ("{release_id}") and status in ({closed})'
                found = ctx.remote.search_issues(jql, maxResults=self.settings.search_max_results)
                issues = [remote_issue_from_resource(i) for i in found]
        except REMOTE_ERRORS as exc:
            logger.error("Error generating release report for %s. Remote call failed: %s", release_id, exc)
            raise ExecutionError("Remote call failed", exc) from exc
        report = build_release_report(issues, closed)
        for line in report:
            logger.info("%s", line)
        return report

    # ------------------ Unsupported ------------------
    def add_component(self, component: str) -> None:
        raise NotImplementedError("Adding components is not supported by the Jira connector")

    def remove_component(self, component: str) -> None:
        raise NotImplementedError("Removing components is not supported by the Jira connector")
