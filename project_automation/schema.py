"""Resolve the board's Status options and configured extra fields to IDs."""

from __future__ import annotations

import logging

from .errors import SchemaError
from .github_projects import GitHubProjectClient, ProjectField
from .models import FieldRequest, ProjectFields, ResolvedField, StatusField

logger = logging.getLogger(__name__)

STATUS_FIELD_NAME = "Status"
IN_PROGRESS = "in progress"
IN_REVIEW = "in review"


def fetch_project_fields(
    client: GitHubProjectClient,
    project_id: str,
    requests: list[FieldRequest],
) -> ProjectFields:
    """Fetch the board's fields and resolve them against ``requests``."""
    logger.info("Fetching project fields...")
    fields = client.get_fields(project_id)
    return resolve_project_fields(fields, requests)


def resolve_project_fields(
    fields: list[ProjectField],
    requests: list[FieldRequest],
) -> ProjectFields:
    """Resolve Status options and extra field requests against board fields.

    Status options are found by case-insensitive substring match, so
    "In Progress 🚧" counts as the in-progress option. Extra fields need an
    exact field name and an exact option value. A field name match consumes
    the request even when the value is not an option of that field.

    Raises:
        SchemaError: Status or one of its two options is missing, or a
            request could not be resolved (the first one is named).
    """
    status_field_id = ""
    in_progress_option_id = ""
    in_review_option_id = ""
    # Indexes into ``requests``; identical requests are tracked separately.
    pending = list(range(len(requests)))
    resolved: dict[int, ResolvedField] = {}

    for project_field in fields:
        if project_field.name == STATUS_FIELD_NAME:
            status_field_id = project_field.id
            for option_name, option_id in project_field.options.items():
                lowered = option_name.lower()
                if IN_PROGRESS in lowered:
                    in_progress_option_id = option_id
                elif IN_REVIEW in lowered:
                    in_review_option_id = option_id

        index = next(
            (i for i in pending if requests[i].field_name == project_field.name),
            None,
        )
        if index is None:
            continue
        pending.remove(index)
        request = requests[index]
        option_id = project_field.options.get(request.value)
        if option_id is None:
            logger.debug(
                "Field '%s' has no option '%s' (options: %s)",
                request.field_name,
                request.value,
                list(project_field.options),
            )
            continue
        resolved[index] = ResolvedField(field_id=project_field.id, option_id=option_id)

    if not (status_field_id and in_progress_option_id and in_review_option_id):
        raise SchemaError(
            f'The field "{STATUS_FIELD_NAME}" with the options "In progress" '
            f'and "In review" doesn\'t exist'
        )

    extra_fields: list[ResolvedField] = []
    for index, request in enumerate(requests):
        if index not in resolved:
            raise SchemaError(f"The {request} doesn't exist")
        extra_fields.append(resolved[index])

    logger.debug(
        "Resolved Status field %s (in progress: %s, in review: %s) and %d extra field(s)",
        status_field_id,
        in_progress_option_id,
        in_review_option_id,
        len(extra_fields),
    )
    return ProjectFields(
        status=StatusField(
            field_id=status_field_id,
            in_progress_option_id=in_progress_option_id,
            in_review_option_id=in_review_option_id,
        ),
        extra_fields=extra_fields,
    )
