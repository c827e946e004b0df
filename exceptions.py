# exceptions.py
"""Exception hierarchy for the availability and pricing core."""


class AvailabilityError(Exception):
     """Base exception for all availability service errors."""


class UpstreamReadError(AvailabilityError):
     """Raised when the spreadsheet or relational source cannot be read."""


class NotFoundError(AvailabilityError):
     """Raised when a unit lookup has no match."""


class InvalidInputError(AvailabilityError):
     """Raised when required request input is missing or not usable."""
