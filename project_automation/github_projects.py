"""GitHub Projects v2 GraphQL client, plus the REST issue calls the linker needs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .errors import GraphQLError, ProjectNotFoundError, ResponseError
from .models import BoardItem, RepositoryRef

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_GRAPHQL_URL = f"{GITHUB_API_URL}/graphql"

# Single page only: boards with more fields or items are not fully scanned.
PAGE_SIZE = 100


@dataclass
class ProjectField:
    """A single-select field on a GitHub Project board."""

    id: str
    name: str
    options: dict[str, str] = field(default_factory=dict)  # name -> option_id


def _require(data: Any, *path: str) -> Any:
    """Walk ``path`` into a response dict, failing on any missing or null value."""
    current = data
    walked: list[str] = []
    for key in path:
        walked.append(key)
        if not isinstance(current, dict) or current.get(key) is None:
            raise ResponseError(f"Response is missing '{'.'.join(walked)}'")
        current = current[key]
    return current


class GitHubProjectClient:
    """Client for interacting with GitHub Projects v2 via GraphQL."""

    def __init__(
        self,
        token: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=30.0,
            transport=transport,
        )

    def __enter__(self) -> GitHubProjectClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _graphql(self, document: str, variables: dict | None = None) -> dict:
        """Execute a GraphQL document and return the response data."""
        payload: dict = {"query": document}
        if variables:
            payload["variables"] = variables
        resp = self._client.post(GITHUB_GRAPHQL_URL, json=payload)
        resp.raise_for_status()
        body = resp.json()
        if body.get("errors"):
            raise GraphQLError(f"GraphQL errors: {json.dumps(body['errors'], indent=2)}")
        return body.get("data") or {}

    def query(self, document: str, variables: dict | None = None) -> dict:
        """Run a read-only GraphQL query."""
        return self._graphql(document, variables)

    def mutate(self, document: str, variables: dict | None = None) -> dict:
        """Run a GraphQL mutation."""
        return self._graphql(document, variables)

    # ------------------------------------------------------------------
    # Project discovery
    # ------------------------------------------------------------------

    def get_project_id(self, owner: str, project_number: int) -> str:
        """Fetch the node ID of a user-owned project."""
        query = """
        query($owner: String!, $number: Int!) {
          user(login: $owner) {
            projectV2(number: $number) {
              id
            }
          }
        }
        """
        data = self.query(query, {"owner": owner, "number": project_number})
        project = (data.get("user") or {}).get("projectV2")
        if project is None:
            raise ProjectNotFoundError(
                f'A project with owner "{owner}" and number "{project_number}" doesn\'t exist'
            )
        return _require(project, "id")

    def get_fields(self, project_id: str) -> list[ProjectField]:
        """Fetch the project's single-select fields, in board order."""
        query = """
        query($projectId: ID!, $first: Int!) {
          node(id: $projectId) {
            ... on ProjectV2 {
              fields(first: $first) {
                nodes {
                  ... on ProjectV2SingleSelectField {
                    id
                    name
                    options {
                      id
                      name
                    }
                  }
                }
              }
            }
          }
        }
        """
        data = self.query(query, {"projectId": project_id, "first": PAGE_SIZE})
        nodes = _require(data, "node", "fields", "nodes")
        fields: list[ProjectField] = []
        for node in nodes:
            # Other field types come back as empty fragments
            if not node or not node.get("id") or not node.get("name"):
                continue
            options = {
                opt["name"]: opt["id"]
                for opt in node.get("options") or []
                if opt.get("name") is not None and opt.get("id")
            }
            fields.append(ProjectField(id=node["id"], name=node["name"], options=options))
        logger.debug("Fetched %d single-select fields", len(fields))
        return fields

    # ------------------------------------------------------------------
    # Read items
    # ------------------------------------------------------------------

    def list_items(self, project_id: str) -> list[BoardItem]:
        """List the first page of items on the project board."""
        query = """
        query($projectId: ID!, $first: Int!) {
          node(id: $projectId) {
            ... on ProjectV2 {
              items(first: $first) {
                nodes {
                  id
                  content {
                    ... on Issue {
                      number
                      repository {
                        name
                      }
                    }
                  }
                }
              }
            }
          }
        }
        """
        data = self.query(query, {"projectId": project_id, "first": PAGE_SIZE})
        nodes = _require(data, "node", "items", "nodes")
        items = [self._parse_item_node(node) for node in nodes if node]
        logger.debug("Fetched %d board items", len(items))
        return items

    def _parse_item_node(self, node: dict) -> BoardItem:
        item_id = _require(node, "id")
        content = node.get("content") or {}
        number = content.get("number")
        repo_name = (content.get("repository") or {}).get("name")
        if number is None or repo_name is None:
            return BoardItem(item_id=item_id)
        return BoardItem(item_id=item_id, issue_number=number, repo_name=repo_name)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def add_item_to_project(self, project_id: str, content_id: str) -> str:
        """Add an issue or pull request to the project. Returns the new item ID."""
        mutation = """
        mutation($projectId: ID!, $contentId: ID!) {
          addProjectV2ItemById(input: {
            projectId: $projectId,
            contentId: $contentId
          }) {
            item { id }
          }
        }
        """
        data = self.mutate(mutation, {"projectId": project_id, "contentId": content_id})
        return _require(data, "addProjectV2ItemById", "item", "id")

    def update_item_field_single_select(
        self, project_id: str, item_id: str, field_id: str, option_id: str
    ) -> None:
        """Update a single-select field on a project item."""
        mutation = """
        mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
          updateProjectV2ItemFieldValue(input: {
            projectId: $projectId,
            itemId: $itemId,
            fieldId: $fieldId,
            value: { singleSelectOptionId: $optionId }
          }) {
            projectV2Item { id }
          }
        }
        """
        self.mutate(
            mutation,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "optionId": option_id,
            },
        )

    # ------------------------------------------------------------------
    # REST: issues (pull requests share the issues endpoint)
    # ------------------------------------------------------------------

    def get_issue(self, repo: RepositoryRef, number: int) -> dict:
        """Fetch an issue or pull request via the REST issues endpoint."""
        resp = self._client.get(
            f"{GITHUB_API_URL}/repos/{repo.owner}/{repo.name}/issues/{number}"
        )
        resp.raise_for_status()
        return resp.json()

    def update_issue(self, repo: RepositoryRef, number: int, **fields: Any) -> None:
        """Patch fields (e.g. ``body``) of an issue or pull request."""
        resp = self._client.patch(
            f"{GITHUB_API_URL}/repos/{repo.owner}/{repo.name}/issues/{number}",
            json=fields,
        )
        resp.raise_for_status()

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()
