"""Build a RepositoryEvent from the event payload of the hosting runtime."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import EventPayloadError
from .models import IssueRef, PullRequestRef, RepositoryEvent, RepositoryRef

logger = logging.getLogger(__name__)


def event_from_payload(
    event_name: str,
    payload: dict,
    repository: RepositoryRef | None = None,
) -> RepositoryEvent:
    """Convert a webhook payload into a RepositoryEvent.

    The issue and pull request parts are only filled in when the payload
    carries them; whether they are required is up to the reconciler.

    Args:
        event_name: Webhook event name, e.g. "issues" or "pull_request"
        payload: Decoded webhook payload
        repository: Acting repository; read from the payload when omitted
    """
    if repository is None:
        repository = _repository_from_payload(payload)

    issue = None
    raw_issue = payload.get("issue")
    if raw_issue:
        issue = IssueRef(
            number=_required(raw_issue, "number", "issue"),
            node_id=_required(raw_issue, "node_id", "issue"),
        )

    pull_request = None
    raw_pr = payload.get("pull_request")
    if raw_pr:
        head = _required(raw_pr, "head", "pull_request")
        pull_request = PullRequestRef(
            number=_required(raw_pr, "number", "pull_request"),
            head_ref=_required(head, "ref", "pull_request.head"),
        )

    return RepositoryEvent(
        event_name=event_name,
        action=payload.get("action") or "",
        repository=repository,
        issue=issue,
        pull_request=pull_request,
    )


def load_event(
    event_name: str,
    event_path: str | Path,
    repository: RepositoryRef | None = None,
) -> RepositoryEvent:
    """Read the event payload JSON file (``GITHUB_EVENT_PATH``)."""
    p = Path(event_path)
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise EventPayloadError(f"Cannot read event payload {p}: {e}") from e
    if not isinstance(payload, dict):
        raise EventPayloadError(f"Event payload {p} is not a JSON object")
    event = event_from_payload(event_name, payload, repository)
    logger.debug(
        "Loaded %s/%s event for %s from %s",
        event.event_name,
        event.action,
        event.repository,
        p,
    )
    return event


def _repository_from_payload(payload: dict) -> RepositoryRef:
    repo = payload.get("repository") or {}
    owner = (repo.get("owner") or {}).get("login")
    name = repo.get("name")
    if not owner or not name:
        raise EventPayloadError("Event payload has no repository owner and name")
    return RepositoryRef(owner=owner, name=name)


def _required(data: dict, key: str, where: str):
    value = data.get(key)
    if value is None:
        raise EventPayloadError(f"Event payload is missing '{where}.{key}'")
    return value
