"""
Error taxonomy shared by the planning and recommendation services.

Views translate these into HTTP responses:
- InvalidArgument   -> 400
- NotFound          -> 404
- DataAccessFailure -> 500 (cause is logged, never returned to the client)
"""


class PlannerError(Exception):
    """Base class for errors raised by the destination services."""

    default_message = 'Request could not be processed'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(PlannerError):
    """Malformed or missing required input, detected before any data access."""
    default_message = 'Invalid request parameters'


class NotFound(PlannerError):
    """A referenced city/country does not exist or has no usable POIs."""
    default_message = 'Not found'


class DataAccessFailure(PlannerError):
    """The relational store could not answer a query."""
    default_message = 'Database query failed'
