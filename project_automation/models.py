"""Data models for board fields, board items and repository events."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldRequest:
    """A single-select field value to set on newly added issues."""

    field_name: str
    value: str

    def __str__(self) -> str:
        return f'field "{self.field_name}" with the option "{self.value}"'


@dataclass(frozen=True)
class ResolvedField:
    field_id: str
    option_id: str


@dataclass(frozen=True)
class StatusField:
    """The board's Status field and the two options the automation moves items to."""

    field_id: str
    in_progress_option_id: str
    in_review_option_id: str


@dataclass
class ProjectFields:
    """Result of resolving the board schema against the configured field requests."""

    status: StatusField
    extra_fields: list[ResolvedField] = field(default_factory=list)


@dataclass(frozen=True)
class BoardItem:
    """An item on the project board.

    ``issue_number`` and ``repo_name`` are None when the item's content is not
    an issue (draft issue, pull request, or content the token cannot see).
    """

    item_id: str
    issue_number: int | None = None
    repo_name: str | None = None

    @property
    def has_issue(self) -> bool:
        return self.issue_number is not None and self.repo_name is not None

    def matches(self, issue_number: int, repo_name: str) -> bool:
        return (
            self.has_issue
            and self.issue_number == issue_number
            and self.repo_name == repo_name
        )


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> RepositoryRef:
        """Parse an ``owner/name`` string."""
        owner, sep, name = full_name.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Invalid repository: {full_name!r}. Expected <owner>/<name>")
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class IssueRef:
    number: int
    node_id: str


@dataclass(frozen=True)
class PullRequestRef:
    number: int
    head_ref: str


@dataclass(frozen=True)
class RepositoryEvent:
    """The triggering event, as handed to the reconciler."""

    event_name: str
    action: str
    repository: RepositoryRef
    issue: IssueRef | None = None
    pull_request: PullRequestRef | None = None
