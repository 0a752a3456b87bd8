"""Exceptions raised by the family tree services."""


class HeritageError(Exception):
    """Base class for every recoverable error raised by this package."""


class ValidationError(HeritageError, ValueError):
    """An operation was rejected because its input is not acceptable.

    `reason` is a short machine-readable code: empty_name, self_reference,
    cycle, invalid_relationship or invalid_field.
    """

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class NotFoundError(HeritageError, LookupError):
    """The referenced person is not (or no longer) in the store."""

    def __init__(self, record_id: int):
        super().__init__(f"Person ID {record_id} not found")
        self.record_id = record_id
