"""
Domain exceptions for reports services.

Exception Hierarchy:
    ReportsServiceError (base)
    └── MissingLinkageError

Monetary and schedule errors raised while building a report come from the
registrations and programs services (``InvalidAmountError``,
``ScheduleError``) and propagate unchanged.
"""


class ReportsServiceError(Exception):
    """Base exception for reports services."""
    pass


class MissingLinkageError(ReportsServiceError):
    """
    Raised when a registration points at a participant, product or season
    that is not in the loaded snapshot.

    Aggregation and export skip such registrations and count them.

    Attributes:
        registration_id: The registration that could not be resolved.
        missing: Which link is missing ('participant', 'product' or 'season').
    """

    def __init__(self, registration_id, missing):
        self.registration_id = registration_id
        self.missing = missing
        super().__init__(f"Registration {registration_id} has no {missing}")
