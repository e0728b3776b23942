# errors.py
"""
Error taxonomy for the check-in system.
Every error carries an error_code string so controllers can return the
standard JSON envelope without inspecting exception types.
"""


class CheckInErrorCode:
    """Check-in error codes."""
    VALIDATION_ERROR = 'validation_error'
    NOT_FOUND = 'not_found'
    IMPORT_FORMAT_ERROR = 'import_format_error'
    RESOURCE_UNAVAILABLE = 'resource_unavailable'
    CODE_COLLISION = 'code_collision'
    PERSISTENCE_ERROR = 'persistence_error'


class CheckInError(Exception):
    """Base class for recoverable check-in errors."""

    error_code = 'check_in_error'
    status_code = 500

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        result = {
            'success': False,
            'message': self.message,
            'error_code': self.error_code
        }
        if self.details:
            result['details'] = self.details
        return result


class ValidationError(CheckInError):
    """A required field is missing or empty."""
    error_code = CheckInErrorCode.VALIDATION_ERROR
    status_code = 400


class NotFoundError(CheckInError):
    """An operation referenced an unknown id."""
    error_code = CheckInErrorCode.NOT_FOUND
    status_code = 404


class ImportFormatError(CheckInError):
    """Import file could not be parsed or lacks the required columns."""
    error_code = CheckInErrorCode.IMPORT_FORMAT_ERROR
    status_code = 400


class ResourceAcquisitionError(CheckInError):
    """Camera permission denied or device unavailable."""
    error_code = CheckInErrorCode.RESOURCE_UNAVAILABLE
    status_code = 503


class CodeCollisionError(CheckInError):
    """No unique code could be generated within the retry budget."""
    error_code = CheckInErrorCode.CODE_COLLISION
    status_code = 409


class PersistenceError(CheckInError):
    """Blob write could not be verified."""
    error_code = CheckInErrorCode.PERSISTENCE_ERROR
    status_code = 500
