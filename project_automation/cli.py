"""CLI entry point for project-automation."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import httpx

from .config import load_config
from .errors import AutomationError
from .events import load_event
from .github_projects import GitHubProjectClient
from .models import RepositoryRef
from .reconciler import run


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="project-automation",
        description="Move issues across a GitHub Project board as they are "
        "opened, assigned and picked up by pull requests.",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="GitHub token with Projects scope (or set INPUT_GITHUB-TOKEN / GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--project-url",
        type=str,
        default=None,
        help="Project URL, e.g. https://github.com/users/<owner>/projects/<number>",
    )
    parser.add_argument(
        "--project-owner",
        type=str,
        default=None,
        help="Login of the user owning the project (defaults to the repository owner)",
    )
    parser.add_argument(
        "--project-number",
        type=int,
        default=None,
        help="GitHub Project board number",
    )
    parser.add_argument(
        "--field-names",
        type=str,
        default=None,
        help="Comma separated single-select fields to set on newly opened issues",
    )
    parser.add_argument(
        "--field-values",
        type=str,
        default=None,
        help="Comma separated option values, one per entry of --field-names",
    )
    parser.add_argument(
        "--event-name",
        type=str,
        default=os.environ.get("GITHUB_EVENT_NAME"),
        help="Triggering event name (default: GITHUB_EVENT_NAME)",
    )
    parser.add_argument(
        "--event-path",
        type=str,
        default=os.environ.get("GITHUB_EVENT_PATH"),
        help="Path to the event payload JSON (default: GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--repository",
        type=str,
        default=os.environ.get("GITHUB_REPOSITORY"),
        help="Acting repository as <owner>/<name> (default: GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--output-json",
        type=str,
        default=None,
        help="Write the result to a JSON file (useful for CI)",
    )

    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )

    if not args.event_name or not args.event_path:
        logging.error(
            "No event provided. Use --event-name/--event-path or run inside GitHub Actions"
        )
        return 1

    try:
        repository = RepositoryRef.parse(args.repository) if args.repository else None
    except ValueError as e:
        logging.error("%s", e)
        return 1

    try:
        event = load_event(args.event_name, args.event_path, repository)
        config = load_config(
            event.repository.owner,
            github_token=args.token,
            project_url=args.project_url,
            project_owner=args.project_owner,
            project_number=args.project_number,
            field_names=args.field_names,
            field_values=args.field_values,
        )
    except AutomationError as e:
        logging.error("%s", e)
        return 1

    client = GitHubProjectClient(token=config.github_token)
    try:
        result = run(client, config, event)
    except (AutomationError, httpx.HTTPError) as e:
        logging.error("%s", e)
        return 1
    finally:
        client.close()

    logging.info("%s", result)

    # Write JSON output for CI
    if args.output_json:
        Path(args.output_json).write_text(json.dumps({"result": result}, indent=2))
        logging.info("Result written to %s", args.output_json)

    github_output = os.environ.get("GITHUB_OUTPUT")
    if github_output:
        with open(github_output, "a", encoding="utf-8") as fh:
            fh.write(f"result={result}\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
