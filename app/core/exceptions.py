from typing import Optional, Any


class QuickServeError(Exception):
    """
    Base exception for QuickServe application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ResourceNotFoundError(QuickServeError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class AuthenticationError(QuickServeError):
    """
    Raised when the current user cannot be resolved.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)


class ValidationError(QuickServeError):
    """
    Raised when onboarding input fails a validation rule.
    Never reaches the external stores.
    """
    def __init__(self, message: str = "Validation error", field: Optional[str] = None, details: Optional[Any] = None):
        if details is None and field is not None:
            details = {"field": field}
        self.field = field
        super().__init__(message, code="VALIDATION_ERROR", status_code=422, details=details)


class CommitError(QuickServeError):
    """
    Raised when a persistence phase of the onboarding commit fails.

    phase is 1 for the profile update and 2 for the provider record.
    The message is the store's own message, shown to the user as-is.
    """
    def __init__(self, message: str = "Could not save your profile", phase: int = 1, details: Optional[Any] = None):
        self.phase = phase
        if details is None:
            details = {"phase": phase}
        super().__init__(message, code="COMMIT_FAILED", status_code=502, details=details)


class ProviderAlreadyExistsError(QuickServeError):
    """
    Raised by a provider store when a record already exists for the user id.
    """
    def __init__(self, provider_id: str, message: Optional[str] = None):
        self.provider_id = provider_id
        super().__init__(
            message or f"Service provider profile already exists for user {provider_id}",
            code="PROVIDER_EXISTS",
            status_code=409,
            details={"provider_id": provider_id}
        )


class FetchError(QuickServeError):
    """
    Raised when the service category list cannot be loaded.
    """
    def __init__(self, message: str = "Could not load service categories", details: Optional[Any] = None):
        super().__init__(message, code="CATEGORY_FETCH_FAILED", status_code=502, details=details)


class InvalidTransitionError(QuickServeError):
    """
    Raised when the onboarding state machine is asked for an illegal phase change.
    """
    def __init__(self, from_phase: str, to_phase: str):
        super().__init__(
            f"Invalid phase transition: {from_phase} -> {to_phase}",
            code="INVALID_TRANSITION",
            status_code=409,
            details={"from": from_phase, "to": to_phase}
        )
