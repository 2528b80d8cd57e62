"""Driver error classes.

Economic ineligibility (e.g. a settlement without mature orders) is not an
error: it is expressed as a filtering decision plus a solver notification.
These classes cover malformed inputs and encoding failures only.
"""


class DriverError(Exception):
    """Base error for settlement evaluation and encoding."""

    pass


class ModelError(DriverError, ValueError):
    """A domain object was constructed with an invalid field value."""

    pass


class InvalidEnumValue(ModelError):
    """A closed enumeration (balance source, signing scheme, ...) got an unknown value."""

    pass


class EncodingError(DriverError):
    """A settlement could not be converted into the wire solution format."""

    pass


class RatingError(DriverError):
    """The external rater could not produce numbers for a settlement."""

    pass
