"""Link a pull request to the issue it closes."""

from __future__ import annotations

import logging

from .github_projects import GitHubProjectClient
from .models import RepositoryRef

logger = logging.getLogger(__name__)


def closing_reference_body(body: str | None, issue_number: int) -> str:
    return f"{body or ''}\nCloses #{issue_number}"


def add_closing_reference(
    client: GitHubProjectClient,
    repo: RepositoryRef,
    pull_request_number: int,
    issue_number: int,
) -> None:
    """Append ``Closes #<issue_number>`` to the pull request's description.

    Not idempotent: running it twice appends the line twice.
    """
    pull_request = client.get_issue(repo, pull_request_number)
    body = closing_reference_body(pull_request.get("body"), issue_number)
    client.update_issue(repo, pull_request_number, body=body)
    logger.info(
        "Added closing reference to #%d in %s#%d",
        issue_number,
        repo,
        pull_request_number,
    )
