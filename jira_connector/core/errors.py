"""Exception hierarchy raised by the connector."""

from __future__ import annotations


class ConnectorError(Exception):
    """Base class for every error raised by the connector."""


class ExecutionError(ConnectorError):
    """A remote call failed; ``cause`` holds the original exception."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ConnectionFailedError(ConnectorError):
    """Login was rejected or the Jira endpoint could not be reached."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class NotFoundError(ConnectorError, LookupError):
    """A named component or release does not exist in the project."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} not found: {name!r}")
        self.kind = kind
        self.name = name


class UnmappedValueError(ConnectorError, ValueError):
    def __init__(self, kind: str, value: object):
        super().__init__(f"No {kind} mapping for {value!r}")
        self.kind = kind
        self.value = value
