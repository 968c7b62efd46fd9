"""Tests for the closing reference appended to pull requests."""

from unittest.mock import MagicMock

from project_automation.github_projects import GitHubProjectClient
from project_automation.linker import add_closing_reference, closing_reference_body
from project_automation.models import RepositoryRef

REPO = RepositoryRef("octocat", "X")


def test_closing_reference_appended_to_body():
    assert closing_reference_body("Adds login.", 7) == "Adds login.\nCloses #7"


def test_missing_body_treated_as_empty():
    assert closing_reference_body(None, 7) == "\nCloses #7"
    assert closing_reference_body("", 7) == "\nCloses #7"


def test_add_closing_reference_updates_pull_request():
    client = MagicMock(spec=GitHubProjectClient)
    client.get_issue.return_value = {"number": 12, "body": "Adds login."}

    add_closing_reference(client, REPO, 12, 7)

    client.get_issue.assert_called_once_with(REPO, 12)
    client.update_issue.assert_called_once_with(REPO, 12, body="Adds login.\nCloses #7")


def test_add_closing_reference_is_not_idempotent():
    """Running twice appends a second closing line (accepted behaviour)."""
    client = MagicMock(spec=GitHubProjectClient)
    bodies = ["Adds login."]
    client.get_issue.side_effect = lambda repo, number: {"body": bodies[-1]}
    client.update_issue.side_effect = lambda repo, number, body: bodies.append(body)

    add_closing_reference(client, REPO, 12, 7)
    add_closing_reference(client, REPO, 12, 7)

    assert bodies[-1] == "Adds login.\nCloses #7\nCloses #7"
