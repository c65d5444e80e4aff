import pytest

from jira_connector.core.converters import (
    field_to_remote_id,
    priority_label_from_code,
    priority_to_code,
    status_label_from_code,
    status_to_code,
    type_label_from_code,
    type_to_code,
)
from jira_connector.core.errors import UnmappedValueError
from jira_connector.core.models import IssueField, IssuePriority, IssueStatus, IssueType


def test_every_local_value_has_a_code():
    for priority in IssuePriority:
        assert priority_to_code(priority) is not None
    for status in IssueStatus:
        assert status_to_code(status) is not None
    for issue_type in IssueType:
        assert type_to_code(issue_type) is not None


def test_priority_mapping():
    assert priority_to_code(IssuePriority.IMMEDIATE) == "1"
    assert priority_to_code(IssuePriority.LOW) == "5"
    assert priority_label_from_code(priority_to_code(IssuePriority.HIGH)) == "Major"


def test_status_closed_code():
    assert status_to_code(IssueStatus.CLOSED) == "6"
    assert status_label_from_code("6") == "Closed"


def test_type_labels_round_trip():
    assert type_label_from_code(type_to_code(IssueType.BUG)) == "Bug"
    assert type_label_from_code(type_to_code(IssueType.NEW_FEATURE)) == "New Feature"


def test_none_passes_through():
    assert priority_to_code(None) is None
    assert type_label_from_code(None) is None


def test_unmapped_code_raises():
    with pytest.raises(UnmappedValueError) as info:
        type_label_from_code("99")
    assert info.value.value == "99"
    # Still a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        status_label_from_code("2")


def test_field_ids():
    assert field_to_remote_id(IssueField.OWNER) == "assignee"
    assert field_to_remote_id(IssueField.DUEVERSION) == "fixVersions"
    assert field_to_remote_id(IssueField.COMPONENT) == "components"
    assert field_to_remote_id(IssueField.STATUS) is None
