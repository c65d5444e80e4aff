import pytest
from requests import ConnectionError as RequestsConnectionError

from jira_connector.core.errors import ConnectionFailedError
from jira_connector.core.jira_client import JiraSession


def _session(client, calls=None):
    def factory(**kwargs):
        if calls is not None:
            calls.append(kwargs)
        return client

    return JiraSession("https://jira.example.com/", client_factory=factory)


def test_connect_uses_session_auth_without_retries(fake_jira_cls):
    fake = fake_jira_cls()
    calls = []
    session = _session(fake, calls)
    session.connect("alice", "secret")
    assert calls == [
        {
            "server": "https://jira.example.com",
            "auth": ("alice", "secret"),
            "get_server_info": False,
            "max_retries": 0,
            "timeout": 30,
        }
    ]
    assert session.get_authentication_token() == "session-token"
    assert session.get_remote_service() is fake
    assert fake.called("session")


def test_rejected_login_raises_connection_failed(fake_jira_cls):
    session = _session(fake_jira_cls(reject_login=True))
    with pytest.raises(ConnectionFailedError) as info:
        session.connect("alice", "wrong")
    assert info.value.cause.status_code == 401
    assert not session.connected


def test_unreachable_server_raises_connection_failed():
    def factory(**kwargs):
        raise RequestsConnectionError("connection refused")

    session = JiraSession("https://jira.example.com", client_factory=factory)
    with pytest.raises(ConnectionFailedError):
        session.connect("alice", "secret")


def test_token_requires_connection():
    session = JiraSession("https://jira.example.com")
    with pytest.raises(ConnectionFailedError):
        session.get_authentication_token()
    with pytest.raises(ConnectionFailedError):
        session.get_remote_service()


def test_disconnect_kills_session_and_clears_token(fake_jira_cls):
    fake = fake_jira_cls()
    with _session(fake) as session:
        session.connect("alice", "secret")
    assert fake.called("kill_session")
    assert fake.closed
    with pytest.raises(ConnectionFailedError):
        session.get_authentication_token()


def test_disconnect_failure_is_logged_not_raised(fake_jira_cls, caplog):
    fake = fake_jira_cls(fail_on={"kill_session"})
    session = _session(fake)
    session.connect("alice", "secret")
    session.disconnect()
    assert fake.closed
    assert "Failed to end Jira session" in caplog.text
