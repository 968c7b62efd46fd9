"""Find the board item that represents a given issue."""

from __future__ import annotations

import logging

from .errors import ItemNotFoundError
from .github_projects import GitHubProjectClient
from .models import BoardItem

logger = logging.getLogger(__name__)


def find_item_id(items: list[BoardItem], issue_number: int, repo_name: str) -> str:
    """Return the ID of the first item whose issue matches number and repository.

    Items without issue content are skipped.

    Raises:
        ItemNotFoundError: No item matches.
    """
    for item in items:
        if item.matches(issue_number, repo_name):
            return item.item_id
    raise ItemNotFoundError(
        f"The issue with the number {issue_number} is no item of the project"
    )


def locate_issue_item(
    client: GitHubProjectClient,
    project_id: str,
    issue_number: int,
    repo_name: str,
) -> str:
    """Fetch the board's items and locate the one for ``repo_name#issue_number``."""
    items = client.list_items(project_id)
    item_id = find_item_id(items, issue_number, repo_name)
    logger.info("Found board item %s for %s#%d", item_id, repo_name, issue_number)
    return item_id
