"""Shared fixtures: an in-memory ``jira.JIRA`` double and a service wired to it.

The project root goes onto sys.path so the tests import ``jira_connector``
straight from the checkout, and no test ever opens a connection to a real server.
"""

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jira import JIRAError  # noqa: E402

from jira_connector.core.config import ConnectorSettings  # noqa: E402
from jira_connector.core.jira_client import JiraSession  # noqa: E402
from jira_connector.core.service import JiraIssueService  # noqa: E402


class FakeVersion:
    def __init__(self, id, name, released=False):
        self.id = id
        self.name = name
        self.released = released
        self.updates: list[dict] = []

    def update(self, **kwargs):
        self.updates.append(kwargs)
        self.released = kwargs.get("released", self.released)


class FakeIssue:
    def __init__(self, key, *, type_id="1", status_id="6", description=None, summary=None):
        self.key = key
        self.fields = SimpleNamespace(
            summary=summary,
            description=description,
            project=SimpleNamespace(key=key.split("-")[0]),
            reporter=None,
            assignee=None,
            priority=SimpleNamespace(id="3"),
            status=SimpleNamespace(id=status_id),
            issuetype=SimpleNamespace(id=type_id),
            components=[],
            fixVersions=[],
        )
        self.updates: list[dict] = []

    def update(self, fields=None, **kwargs):
        self.updates.append(fields)


class FakeJira:
    """Records every call made through the ``jira.JIRA`` surface the connector uses."""

    def __init__(self, *, components=(), versions=(), issues=(), fail_on=(), reject_login=False):
        self.components = [SimpleNamespace(id=cid, name=name) for cid, name in components]
        self.versions = list(versions)
        self.issues = {i.key: i for i in issues}
        self.fail_on = set(fail_on)
        self.reject_login = reject_login
        self.calls: list[tuple] = []
        self.created: list[dict] = []
        self.comments: list[tuple[str, str]] = []
        self.closed = False
        self._session = SimpleNamespace(cookies={"JSESSIONID": "session-token"})

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise JIRAError(text=f"{name} failed", status_code=500)

    def session(self):
        self._record("session")
        if self.reject_login:
            raise JIRAError(text="Unauthorized", status_code=401)
        return SimpleNamespace(name="tester")

    def kill_session(self):
        self._record("kill_session")

    def close(self):
        self.closed = True

    def create_issue(self, fields=None):
        self._record("create_issue", fields)
        self.created.append(fields)
        return SimpleNamespace(key=f"{fields['project']['key']}-{len(self.created)}")

    def add_comment(self, issue, body):
        self._record("add_comment", issue, body)
        self.comments.append((issue, body))

    def issue(self, key, fields=None):
        self._record("issue", key)
        return self.issues.setdefault(key, FakeIssue(key))

    def project_components(self, project):
        self._record("project_components", project)
        return self.components

    def project_versions(self, project):
        self._record("project_versions", project)
        return self.versions

    def search_issues(self, jql, maxResults=50):
        self._record("search_issues", jql, maxResults)
        return list(self.issues.values())

    def called(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def settings():
    return ConnectorSettings(
        server="https://jira.example.com", user="alice", password="secret", project_key="OBS"
    )


@pytest.fixture
def make_service(settings):
    """Build a service whose sessions all talk to ``fake``; returns (service, client kwargs log)."""

    def _make(fake: FakeJira, **overrides):
        for name, value in overrides.items():
            setattr(settings, name, value)
        factory_calls: list[dict] = []

        def client_factory(**kwargs):
            factory_calls.append(kwargs)
            return fake

        service = JiraIssueService(
            settings,
            session_factory=lambda: JiraSession(settings.server, client_factory=client_factory),
        )
        return service, factory_calls

    return _make


@pytest.fixture
def fake_jira_cls():
    return FakeJira


@pytest.fixture
def fake_issue_cls():
    return FakeIssue


@pytest.fixture
def fake_version_cls():
    return FakeVersion
