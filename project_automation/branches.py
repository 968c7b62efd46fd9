"""Derive the issue number from a feature branch name."""

from __future__ import annotations

import re

from .errors import BranchNameError

RE_FEATURE_BRANCH = re.compile(r"^feature/(?P<issue_number>\d+)-[a-zA-Z0-9\-]*$")


def issue_number_from_branch(branch_name: str) -> int:
    """Return the issue number of a ``feature/<issueNumber>-<issueTopic>`` branch."""
    m = RE_FEATURE_BRANCH.match(branch_name)
    if not m:
        raise BranchNameError(
            f"Invalid branch name: {branch_name}. Feature branches names should "
            "match the format feature/<issueNumber>-<issueTopic>"
        )
    return int(m.group("issue_number"))
