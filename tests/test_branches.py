"""Tests for feature branch parsing."""

import pytest

from project_automation.branches import issue_number_from_branch
from project_automation.errors import BranchNameError


@pytest.mark.parametrize(
    "branch, expected",
    [
        ("feature/7-add-login", 7),
        ("feature/42-x", 42),
        ("feature/0123-Fix-Bug-2", 123),
        ("feature/5-", 5),
    ],
)
def test_issue_number_extracted(branch, expected):
    assert issue_number_from_branch(branch) == expected


@pytest.mark.parametrize(
    "branch",
    [
        "main",
        "feature/add-login",
        "feature/7",
        "feature/7_add_login",
        "bugfix/7-add-login",
        "feature/7-add/login",
        "refs/heads/feature/7-add-login",
        "",
    ],
)
def test_invalid_branch_rejected(branch):
    with pytest.raises(BranchNameError) as exc:
        issue_number_from_branch(branch)
    assert "feature/<issueNumber>-<issueTopic>" in str(exc.value)


def test_error_names_the_branch():
    with pytest.raises(BranchNameError, match="Invalid branch name: hotfix"):
        issue_number_from_branch("hotfix")
