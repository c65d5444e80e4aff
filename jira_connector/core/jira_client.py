"""Jira session wrapper: cookie-session login, token access, and disconnect."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from jira import JIRA, JIRAError
from requests import RequestException

from .config import DEFAULT_TIMEOUT, SESSION_COOKIE_NAME
from .errors import ConnectionFailedError

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., JIRA]


class JiraSession:
    """Owns one authenticated connection to a Jira server.

    ``connect`` logs in through Jira's session resource and keeps the session
    cookie as the authentication token. There is no retry: the underlying
    client is built with ``max_retries=0`` and a failed login propagates
    immediately.
    """

    def __init__(
        self,
        server: str,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        cookie_name: str = SESSION_COOKIE_NAME,
        client_factory: ClientFactory = JIRA,
    ):
        self.server = server.rstrip("/")
        self.timeout = timeout
        self.cookie_name = cookie_name
        self._client_factory = client_factory
        self._client: JIRA | None = None
        self._token: str | None = None

    def __enter__(self) -> JiraSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @property
    def connected(self) -> bool:
        return self._client is not None

    def connect(self, user: str | None, password: str | None) -> None:
        try:
            client = self._client_factory(
                server=self.server,
                auth=(user, password),
                get_server_info=False,
                max_retries=0,
                timeout=self.timeout,
            )
            # Round trip through /rest/auth/1/session; sets the session cookie
            client.session()
        except JIRAError as exc:
            raise ConnectionFailedError(
                f"Jira rejected login for {user!r} ({exc.status_code}): {exc.text}", exc
            ) from exc
        except RequestException as exc:
            raise ConnectionFailedError(f"Jira server {self.server} unreachable: {exc}", exc) from exc
        self._client = client
        self._token = self._read_session_cookie(client)

    def _read_session_cookie(self, client: Any) -> str | None:
        session = getattr(client, "_session", None)
        if session is None:
            return None
        return session.cookies.get(self.cookie_name)

    def get_authentication_token(self) -> str | None:
        if self._client is None:
            raise ConnectionFailedError("Session is not connected")
        return self._token

    def get_remote_service(self) -> JIRA:
        if self._client is None:
            raise ConnectionFailedError("Session is not connected")
        return self._client

    def disconnect(self) -> None:
        """Log out and release the HTTP session (best effort)."""
        client = self._client
        self._client = None
        self._token = None
        if client is None:
            return
        try:
            client.kill_session()
        except (JIRAError, RequestException) as exc:
            logger.warning("Failed to end Jira session on %s: %s", self.server, exc)
        finally:
            client.close()
