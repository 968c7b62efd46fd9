"""Reconcile one repository event with the project board."""

from __future__ import annotations

import logging

from .branches import issue_number_from_branch
from .config import Config
from .errors import EventPayloadError, UnexpectedEventError
from .github_projects import GitHubProjectClient
from .linker import add_closing_reference
from .locator import locate_issue_item
from .models import IssueRef, ProjectFields, PullRequestRef, RepositoryEvent
from .schema import fetch_project_fields

logger = logging.getLogger(__name__)

ADDED_TO_PROJECT = "Successfully added issue to the project"
SET_IN_PROGRESS = 'Successfully set issue\'s status to "In Progress"'
SET_IN_REVIEW = (
    'Successfully set issue\'s status to "In Review" and added closing '
    "reference to pull request"
)


def run(client: GitHubProjectClient, config: Config, event: RepositoryEvent) -> str:
    """Resolve the board once and apply the event to it.

    Returns:
        A human-readable description of what was changed.
    """
    logger.info(
        "Resolving project %s/%d...", config.project_owner, config.project_number
    )
    project_id = client.get_project_id(config.project_owner, config.project_number)
    fields = fetch_project_fields(client, project_id, config.field_requests)
    return handle_event(client, event, project_id, fields)


def handle_event(
    client: GitHubProjectClient,
    event: RepositoryEvent,
    project_id: str,
    fields: ProjectFields,
) -> str:
    """Dispatch on (event name, action) and perform the matching board mutations.

    Unsupported events and actions fail before any remote call. Nothing is
    rolled back if a later call fails.
    """
    logger.info("Handling %s/%s event", event.event_name, event.action)
    if event.event_name == "issues":
        if event.action == "opened":
            return _issue_opened(client, project_id, fields, _issue(event))
        if event.action == "assigned":
            return _issue_assigned(client, event, project_id, fields, _issue(event))
        raise UnexpectedEventError(
            f'Unexpected issue action: "{event.action}". '
            'Please only use "opened" or "assigned"'
        )
    if event.event_name == "pull_request":
        if event.action == "opened":
            return _pull_request_opened(
                client, event, project_id, fields, _pull_request(event)
            )
        raise UnexpectedEventError(
            f'Unexpected pull request action: "{event.action}". '
            'Please only use "opened"'
        )
    raise UnexpectedEventError(
        f'Unexpected event: "{event.event_name}". '
        'Please only use "issues" or "pull_request"'
    )


def _issue_opened(
    client: GitHubProjectClient,
    project_id: str,
    fields: ProjectFields,
    issue: IssueRef,
) -> str:
    # No existence check: a second "opened" run adds a second item.
    item_id = client.add_item_to_project(project_id, issue.node_id)
    logger.info("Added issue #%d to the project as %s", issue.number, item_id)
    for extra in fields.extra_fields:
        client.update_item_field_single_select(
            project_id, item_id, extra.field_id, extra.option_id
        )
        logger.debug("Set field %s to option %s", extra.field_id, extra.option_id)
    return ADDED_TO_PROJECT


def _issue_assigned(
    client: GitHubProjectClient,
    event: RepositoryEvent,
    project_id: str,
    fields: ProjectFields,
    issue: IssueRef,
) -> str:
    item_id = locate_issue_item(
        client, project_id, issue.number, event.repository.name
    )
    client.update_item_field_single_select(
        project_id,
        item_id,
        fields.status.field_id,
        fields.status.in_progress_option_id,
    )
    logger.info("Moved issue #%d to In Progress", issue.number)
    return SET_IN_PROGRESS


def _pull_request_opened(
    client: GitHubProjectClient,
    event: RepositoryEvent,
    project_id: str,
    fields: ProjectFields,
    pull_request: PullRequestRef,
) -> str:
    issue_number = issue_number_from_branch(pull_request.head_ref)
    item_id = locate_issue_item(
        client, project_id, issue_number, event.repository.name
    )
    client.update_item_field_single_select(
        project_id,
        item_id,
        fields.status.field_id,
        fields.status.in_review_option_id,
    )
    logger.info("Moved issue #%d to In Review", issue_number)
    add_closing_reference(client, event.repository, pull_request.number, issue_number)
    return SET_IN_REVIEW


def _issue(event: RepositoryEvent) -> IssueRef:
    if event.issue is None:
        raise EventPayloadError(f"The {event.event_name} event has no issue")
    return event.issue


def _pull_request(event: RepositoryEvent) -> PullRequestRef:
    if event.pull_request is None:
        raise EventPayloadError(f"The {event.event_name} event has no pull request")
    return event.pull_request
