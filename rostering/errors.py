class SchedulerError(Exception):
    """Base class for roster generation failures."""


class ValidationError(SchedulerError):
    """Malformed input; raised before any rows are written."""


class NotFoundError(SchedulerError):
    """Referenced roster or session does not exist."""
