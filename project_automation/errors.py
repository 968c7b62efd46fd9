"""Exceptions raised while reconciling a repository event with a project board."""


class AutomationError(Exception):
    """Base exception for project automation errors."""


class ConfigurationError(AutomationError):
    """Action inputs are missing or malformed."""


class EventPayloadError(AutomationError):
    """The event payload lacks a value the event requires."""


class UnexpectedEventError(AutomationError):
    """Event name or action is not handled."""


class ProjectNotFoundError(AutomationError):
    """No project with the given owner and number."""


class SchemaError(AutomationError):
    """The board is missing a required field or option."""


class ItemNotFoundError(AutomationError):
    """Issue is not an item of the project."""


class BranchNameError(AutomationError):
    """Branch name does not follow the feature branch format."""


class GraphQLError(AutomationError):
    """The GraphQL API answered with errors."""


class ResponseError(AutomationError):
    """A remote response lacks a required value."""
