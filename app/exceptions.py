"""
Domain failures raised by the service and repository layers.
Routes translate them into HTTP responses.
"""


class TrackerError(Exception):
    """Base class for tracker domain errors."""


class NotFoundError(TrackerError):
    """A referenced id or natural key does not exist."""


class ValidationFailure(TrackerError):
    """Input is well-formed but violates a domain rule."""


class ConflictError(TrackerError):
    """A unique key or referential constraint would be violated."""
