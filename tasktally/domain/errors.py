# -*- coding: utf-8 -*-


class TaskTallyError(Exception):
    pass


class InvalidName(TaskTallyError, ValueError):
    """Task name is empty once trimmed."""


class NotFound(TaskTallyError, LookupError):
    """No task with the requested id."""


class ExportUnavailable(TaskTallyError, RuntimeError):
    """Spreadsheet writer is not installed."""


class PersistenceFailure(TaskTallyError, RuntimeError):
    """The durable store rejected a write or returned unreadable data."""
