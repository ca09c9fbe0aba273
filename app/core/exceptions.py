"""
Error taxonomy for the firmware service.

Every error carries an HTTP status code and a short classification string so the
transport layer can turn it into a structured response without inspecting types.
"""


class FirmwareServiceError(Exception):
    """Base class for errors reported to callers of the firmware service."""
    status_code = 500
    error = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FirmwareServiceError):
    """Bad or missing input, wrong content type or oversized content."""
    status_code = 400
    error = "validation_error"


class NotFoundError(FirmwareServiceError):
    """Unknown device or firmware id."""
    status_code = 404
    error = "not_found"


class BlobStorageError(FirmwareServiceError, OSError):
    """Disk or storage failure while writing or deleting a firmware blob."""
    status_code = 500
    error = "storage_error"


class ConflictError(FirmwareServiceError):
    """Concurrent write detected. Not raised while uploads are serialized per device."""
    status_code = 409
    error = "conflict"
