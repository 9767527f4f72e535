"""Exceptions raised across the task-list app."""


class TaskListsError(Exception):
    """Base class for all app errors."""


class ValidationError(TaskListsError):
    """Empty name/text after trimming, or a malformed action payload."""


class NotFound(TaskListsError):
    """A list id or todo reference that no longer exists."""


class PersistenceError(TaskListsError):
    """The key-value backend failed to read or write."""


class ConfigError(TaskListsError):
    """The config file could not be read or holds invalid values."""
