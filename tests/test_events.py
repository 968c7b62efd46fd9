"""Tests for building RepositoryEvents from webhook payloads."""

import json
from pathlib import Path

import pytest

from project_automation.errors import EventPayloadError
from project_automation.events import event_from_payload, load_event
from project_automation.models import IssueRef, PullRequestRef, RepositoryRef

REPOSITORY = {"name": "X", "owner": {"login": "octocat"}}


def test_issue_event():
    payload = {
        "action": "opened",
        "issue": {"number": 42, "node_id": "I_42", "title": "Bug"},
        "repository": REPOSITORY,
    }
    event = event_from_payload("issues", payload)

    assert event.event_name == "issues"
    assert event.action == "opened"
    assert event.repository == RepositoryRef("octocat", "X")
    assert event.issue == IssueRef(number=42, node_id="I_42")
    assert event.pull_request is None


def test_pull_request_event():
    payload = {
        "action": "opened",
        "pull_request": {"number": 12, "head": {"ref": "feature/7-add-login"}},
        "repository": REPOSITORY,
    }
    event = event_from_payload("pull_request", payload)

    assert event.pull_request == PullRequestRef(number=12, head_ref="feature/7-add-login")
    assert event.issue is None


def test_explicit_repository_wins():
    payload = {"action": "opened", "repository": REPOSITORY}
    event = event_from_payload("push", payload, RepositoryRef("someone", "else"))
    assert event.repository == RepositoryRef("someone", "else")


def test_missing_action_is_empty():
    event = event_from_payload("push", {"repository": REPOSITORY})
    assert event.action == ""


def test_missing_repository():
    with pytest.raises(EventPayloadError, match="repository"):
        event_from_payload("issues", {"action": "opened"})


def test_issue_without_node_id():
    payload = {"action": "opened", "issue": {"number": 42}, "repository": REPOSITORY}
    with pytest.raises(EventPayloadError, match="issue.node_id"):
        event_from_payload("issues", payload)


def test_pull_request_without_head_ref():
    payload = {
        "action": "opened",
        "pull_request": {"number": 12, "head": {}},
        "repository": REPOSITORY,
    }
    with pytest.raises(EventPayloadError, match="pull_request.head.ref"):
        event_from_payload("pull_request", payload)


def test_load_event(tmp_path: Path):
    f = tmp_path / "event.json"
    f.write_text(
        json.dumps(
            {
                "action": "assigned",
                "issue": {"number": 7, "node_id": "I_7"},
                "repository": REPOSITORY,
            }
        )
    )
    event = load_event("issues", f)
    assert event.action == "assigned"
    assert event.issue.number == 7


def test_load_event_unreadable(tmp_path: Path):
    with pytest.raises(EventPayloadError, match="Cannot read"):
        load_event("issues", tmp_path / "missing.json")


def test_load_event_not_an_object(tmp_path: Path):
    f = tmp_path / "event.json"
    f.write_text("[]")
    with pytest.raises(EventPayloadError, match="not a JSON object"):
        load_event("issues", f)


def test_repository_ref_parse():
    assert RepositoryRef.parse("octocat/X") == RepositoryRef("octocat", "X")
    assert str(RepositoryRef("octocat", "X")) == "octocat/X"
    for bad in ("octocat", "/X", "octocat/", "a/b/c"):
        with pytest.raises(ValueError):
            RepositoryRef.parse(bad)
