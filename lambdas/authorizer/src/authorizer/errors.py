"""Error taxonomy for the authorization pipeline.

Every error carries a short ``reason`` code. Reasons only ever reach the
audit log; the gateway always receives a plain deny-all policy.
"""


class AuthorizationError(Exception):
    """Base class for failures that resolve to a deny-all decision."""

    reason = "authorization_error"


class NoCertificatePresentedError(AuthorizationError):
    reason = "no_certificate"


class MalformedCertificateError(AuthorizationError):
    reason = "malformed_certificate"


class MissingFieldError(AuthorizationError):
    """A required certificate field is absent or blank."""

    reason = "missing_field"

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Certificate field '{field_name}' is missing or empty")
        self.field_name = field_name


class StoreUnavailableError(AuthorizationError):
    """Permission data could not be fetched or parsed."""

    reason = "store_unavailable"


class InvalidPermissionEntryError(AuthorizationError):
    """A permissions document entry is malformed.

    ``fingerprint`` names the partner whose entries were rejected, when known.
    """

    reason = "invalid_permission_entry"

    def __init__(self, message: str, fingerprint: str | None = None) -> None:
        super().__init__(message)
        self.fingerprint = fingerprint


class UnexpectedStageError(AuthorizationError):
    """Wraps an exception a pipeline stage was not expected to raise."""

    reason = "unexpected_error"
