class DomainError(Exception):
    """Base exception for business rule violations."""

    default_message = "Domain error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    default_message = "Invalid input"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    default_message = "Invalid username or password"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    default_message = "Forbidden"


class NotFoundError(DomainError):
    """Referenced entity does not exist."""

    default_message = "Not found"


class ConflictError(DomainError):
    """The target state has already been reached."""

    default_message = "Conflict"


class PreconditionFailedError(DomainError):
    """A business rule blocks the action."""

    default_message = "Precondition failed"


class AlreadyCheckedInError(ConflictError):
    default_message = "Already checked in today"


class AlreadyCheckedOutError(ConflictError):
    default_message = "Already checked out today"


class AlreadyApprovedError(ConflictError):
    default_message = "Request already approved"


class AlreadyRolledError(ConflictError):
    default_message = "Payroll already rolled"


class WeekendNotAllowedError(PreconditionFailedError):
    default_message = "Attendance is not allowed on weekends"


class CannotCheckOutError(PreconditionFailedError):
    default_message = "Cannot check out before checking in today"


class SubmitBeforeCheckoutError(PreconditionFailedError):
    default_message = "Overtime can only be submitted after checking out"


class OvertimeExceedsLimitError(PreconditionFailedError):
    default_message = "Overtime exceeds the daily limit"


class PayrollNotRolledError(PreconditionFailedError):
    default_message = "Payroll has not been rolled yet"


class UserInfoMissingError(PreconditionFailedError):
    default_message = "User has no monthly salary configured"
