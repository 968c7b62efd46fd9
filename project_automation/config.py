"""Action inputs: project coordinates, token and extra field requests."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Mapping

from .errors import ConfigurationError
from .models import FieldRequest

RE_PROJECT_URL = re.compile(
    r"^(?:https://)?github\.com/users/(?P<owner>[^/]+)/projects/(?P<number>\d+)"
)


@dataclass
class Config:
    """Resolved inputs for one run."""

    github_token: str
    project_owner: str
    project_number: int
    field_requests: list[FieldRequest] = field(default_factory=list)


def parse_project_url(url: str) -> tuple[str, int]:
    """Split ``github.com/users/<owner>/projects/<number>`` into owner and number."""
    m = RE_PROJECT_URL.match(url.strip())
    if not m:
        raise ConfigurationError(
            f"Invalid project URL: {url}. Project URL should match the format "
            "https://github.com/users/<ownerName>/projects/<projectNumber>"
        )
    return m.group("owner"), int(m.group("number"))


def parse_project_number(raw: str | int) -> int:
    try:
        number = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid project number: {raw!r}") from None
    if number <= 0:
        raise ConfigurationError(f"Invalid project number: {raw!r}. Must be positive")
    return number


def parse_field_requests(field_names: str, field_values: str) -> list[FieldRequest]:
    """Zip comma separated field names and values into FieldRequests.

    Two empty inputs mean no extra fields.
    """
    names = _split_list(field_names)
    values = _split_list(field_values)
    if len(names) != len(values):
        raise ConfigurationError(
            "Invalid input: length of field names is unequal to length of field values"
        )
    return [FieldRequest(field_name=n, value=v) for n, v in zip(names, values)]


def _split_list(raw: str | None) -> list[str]:
    if not raw or not raw.strip():
        return []
    return [part.strip() for part in raw.split(",")]


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    """Read an action input the way the Actions runner exposes it (``INPUT_<NAME>``)."""
    env = os.environ if env is None else env
    return env.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()


def load_config(
    repo_owner: str,
    *,
    github_token: str | None = None,
    project_url: str | None = None,
    project_owner: str | None = None,
    project_number: str | int | None = None,
    field_names: str | None = None,
    field_values: str | None = None,
    env: Mapping[str, str] | None = None,
) -> Config:
    """Resolve the run configuration.

    Explicit arguments win over action inputs; the token falls back to
    ``GITHUB_TOKEN`` and the project owner to ``repo_owner``. A project URL
    supplies both owner and number.
    """
    env = os.environ if env is None else env

    token = github_token or get_input("github-token", env) or env.get("GITHUB_TOKEN", "")
    if not token:
        raise ConfigurationError(
            "No GitHub token provided. Use --token or set INPUT_GITHUB-TOKEN / GITHUB_TOKEN"
        )

    url = project_url or get_input("project-url", env)
    owner = project_owner or get_input("project-owner", env)
    number_raw = project_number if project_number is not None else get_input("project-number", env)
    if url:
        owner, number = parse_project_url(url)
    elif number_raw not in (None, ""):
        number = parse_project_number(number_raw)
    else:
        raise ConfigurationError("Input required and not supplied: project-number")

    names = field_names if field_names is not None else get_input("field-names", env)
    values = field_values if field_values is not None else get_input("field-values", env)

    return Config(
        github_token=token,
        project_owner=owner or repo_owner,
        project_number=number,
        field_requests=parse_field_requests(names, values),
    )
