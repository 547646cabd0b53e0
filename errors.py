"""
errors.py
---------
Failure taxonomy shared by the store, the service and the HTTP handlers.
Every failure the API reports derives from ReviewError.
"""


class ReviewError(Exception):
    """Base class for all review failures surfaced to clients."""


class ValidationError(ReviewError):
    """Malformed path parameter or request body, detected before the store."""


class NotFoundError(ReviewError):
    """A store operation matched zero rows."""


class PersistenceError(ReviewError):
    """Connectivity, constraint, schema or query failure in the store."""


class StoreTimeoutError(ReviewError, TimeoutError):
    """A store operation exceeded its time bound."""
